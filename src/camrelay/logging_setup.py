from __future__ import annotations

import json
import logging
import logging.config
import os

_CURRENT_CAMERA_NAME = "-"
# Anything a bare LogRecord carries is not an `extra`.
_STANDARD_LOGRECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName", "camera_name"}


class _CameraNameFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "camera_name") or getattr(record, "camera_name") in (None, ""):
            record.camera_name = _CURRENT_CAMERA_NAME
        return True


class _TargetFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "target", None) in (None, ""):
            record.target = "-"
        return True


class _JsonExtraFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = _extract_extras(record)
        if "%(target)" in (self._fmt or "") or extras.get("target") == "-":
            extras.pop("target", None)
        if not extras:
            return base
        extras_json = json.dumps(extras, default=str, sort_keys=True)
        return f"{base} {extras_json}"


def _extract_extras(record: logging.LogRecord) -> dict[str, object]:
    return {k: v for k, v in vars(record).items() if k not in _STANDARD_LOGRECORD_ATTRS}


def set_camera_name(name: str | None) -> None:
    """Set the `camera_name` value injected into log records."""
    global _CURRENT_CAMERA_NAME
    _CURRENT_CAMERA_NAME = name or "-"


def _install_record_filters() -> None:
    root = logging.getLogger()
    for handler in root.handlers:
        for filter_cls in (_CameraNameFilter, _TargetFilter):
            if any(isinstance(f, filter_cls) for f in handler.filters):
                continue
            handler.addFilter(filter_cls())


def configure_logging(*, log_level: str = "INFO", camera_name: str | None = None) -> None:
    """Configure root logging with a consistent format.

    Format includes `camera_name/target` plus `module:lineno`. Records
    without a target show `-`. Other structured `extra` fields are appended
    to the line as JSON.
    """
    console_level_name = str(log_level).upper()
    default_console_fmt = (
        "%(asctime)s %(levelname)s [%(camera_name)s/%(target)s] "
        "%(module)s:%(lineno)d %(message)s"
    )
    console_fmt = os.getenv("CONSOLE_LOG_FORMAT", default_console_fmt)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "()": "camrelay.logging_setup._JsonExtraFormatter",
                    "format": console_fmt,
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": console_level_name,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                }
            },
            "root": {"level": "DEBUG", "handlers": ["console"]},
        }
    )

    _install_record_filters()
    set_camera_name(camera_name)
    logging.captureWarnings(True)

    # Reduce noisy third-party request logs by default.
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
