"""Configuration loading and validation."""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from camrelay.models.config import Config

logger = logging.getLogger(__name__)

WEBHOOK_URL_ENV = "CAMRELAY_WEBHOOK_URL"


class ConfigErrorCode(str, Enum):
    """Stable config error codes."""

    FILE_NOT_FOUND = "CONFIG_FILE_NOT_FOUND"
    YAML_INVALID = "CONFIG_YAML_INVALID"
    EMPTY_FILE = "CONFIG_EMPTY_FILE"
    ROOT_NOT_MAPPING = "CONFIG_ROOT_NOT_MAPPING"
    VALIDATION_FAILED = "CONFIG_VALIDATION_FAILED"
    CAMERA_NAME_MISSING = "CONFIG_CAMERA_NAME_MISSING"
    UNKNOWN = "CONFIG_UNKNOWN"


class ConfigError(Exception):
    """Configuration loading or validation error. Fatal at startup."""

    def __init__(
        self,
        message: str,
        *,
        code: ConfigErrorCode = ConfigErrorCode.UNKNOWN,
        path: Path | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.path = path
        self.__cause__ = cause


def load_config(path: Path) -> Config:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to YAML config file

    Returns:
        Validated Config instance

    Raises:
        ConfigError: If file not found, YAML invalid, or validation fails
    """
    if not path.exists():
        raise ConfigError(
            f"Config file not found: {path}",
            code=ConfigErrorCode.FILE_NOT_FOUND,
            path=path,
        )

    try:
        with path.open() as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML in {path}: {e}",
            code=ConfigErrorCode.YAML_INVALID,
            path=path,
            cause=e,
        ) from e

    if raw is None:
        raise ConfigError(
            f"Config file is empty: {path}",
            code=ConfigErrorCode.EMPTY_FILE,
            path=path,
        )

    if not isinstance(raw, dict):
        raise ConfigError(
            f"Config must be a YAML mapping, got {type(raw).__name__}",
            code=ConfigErrorCode.ROOT_NOT_MAPPING,
            path=path,
        )

    return _validate(raw, path)


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load and validate configuration from a dict (useful for testing)."""
    return _validate(data, None)


def build_config(
    camera_name: str | None,
    webhook_url: str | None = None,
    config_path: Path | None = None,
) -> Config:
    """Merge CLI arguments over an optional config file.

    Command-line values win over the file. The webhook URL falls back to
    `CAMRELAY_WEBHOOK_URL` when neither source provides one.

    Raises:
        ConfigError: If the result has no camera name or fails validation
    """
    config = load_config(config_path) if config_path is not None else Config()

    updates: dict[str, Any] = {}
    if camera_name is not None:
        updates["camera_name"] = str(camera_name).strip()

    url = webhook_url or config.webhook.url or os.environ.get(WEBHOOK_URL_ENV)
    if url != config.webhook.url:
        webhook = config.webhook.model_dump()
        webhook["url"] = url
        updates["webhook"] = webhook

    if updates:
        data = config.model_dump()
        data.update(updates)
        config = _validate(data, config_path)

    if not config.camera_name:
        raise ConfigError(
            "Camera name is required",
            code=ConfigErrorCode.CAMERA_NAME_MISSING,
            path=config_path,
        )
    return config


def format_validation_error(e: ValidationError, path: Path | None = None) -> str:
    """Format Pydantic validation error for human readability."""
    prefix = f"Config validation failed ({path}):" if path else "Config validation failed:"
    errors = []
    for err in e.errors():
        loc = " -> ".join(str(x) for x in err["loc"])
        msg = err["msg"]
        errors.append(f"  {loc}: {msg}")
    return prefix + "\n" + "\n".join(errors)


def _validate(data: dict[str, Any], path: Path | None) -> Config:
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            format_validation_error(e, path),
            code=ConfigErrorCode.VALIDATION_FAILED,
            path=path,
            cause=e,
        ) from e
