"""Configuration loading and validation."""

from camrelay.config.loader import (
    WEBHOOK_URL_ENV,
    ConfigError,
    ConfigErrorCode,
    build_config,
    load_config,
    load_config_from_dict,
)

__all__ = [
    "WEBHOOK_URL_ENV",
    "ConfigError",
    "ConfigErrorCode",
    "build_config",
    "load_config",
    "load_config_from_dict",
]
