"""Configuration models for camrelay."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from camrelay.models.enums import MediaKind, SelectionPolicy

DEFAULT_MEDIA_ROOT = "/media/mmc/alarm"
DEFAULT_LATEST_IMAGE_PATH = "/media/mmc/wz_mini/www/latest.jpg"
DEFAULT_STATE_DIR = "/media/mmc/wz_mini/www/camrelay-state"
DEFAULT_LEGACY_STATE_PATH = "/media/mmc/wz_mini/www/last_jpg_path.txt"


class RetryConfig(BaseModel):
    """Retry configuration for webhook delivery.

    The default of one attempt means no retry.
    """

    max_attempts: int = Field(default=1, ge=1)
    backoff_s: float = Field(default=1.0, ge=0.0)


class WebhookConfig(BaseModel):
    """Webhook delivery configuration."""

    model_config = {"extra": "forbid"}

    url: str | None = Field(
        default=None,
        description="Endpoint receiving notifications. Empty disables delivery.",
    )
    verify_tls: bool = Field(
        default=False,
        description="Validate the endpoint's TLS certificate. Off for self-signed devices.",
    )
    timeout_s: float | None = Field(default=10.0, gt=0.0)
    retry: RetryConfig = Field(default_factory=RetryConfig)

    @field_validator("url", mode="before")
    @classmethod
    def _blank_url_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def enabled(self) -> bool:
        return bool(self.url)


class WatchTargetConfig(BaseModel):
    """One (root directory, glob pattern, media kind) tuple under polling."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = ""
    kind: MediaKind
    root_dir: str = DEFAULT_MEDIA_ROOT
    pattern: str = ""
    policy: SelectionPolicy = SelectionPolicy.MTIME
    poll_interval_s: float = Field(default=1.0, gt=0.0)
    scan_timeout_s: float | None = Field(default=None, gt=0.0)
    copy_latest_to: str | None = Field(
        default=None,
        description="Copy each newly detected file to this path.",
    )

    @model_validator(mode="before")
    @classmethod
    def _apply_kind_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        kind = data.get("kind")
        if kind is None:
            return data
        kind = MediaKind(kind)
        data = dict(data)
        if not data.get("name"):
            data["name"] = str(kind)
        if not data.get("pattern"):
            data["pattern"] = kind.default_pattern
        return data


def _default_targets() -> list[WatchTargetConfig]:
    return [
        WatchTargetConfig(kind=MediaKind.IMAGE, copy_latest_to=DEFAULT_LATEST_IMAGE_PATH),
        WatchTargetConfig(kind=MediaKind.VIDEO),
    ]


class StateConfig(BaseModel):
    """Where per-target state files are kept.

    `legacy_path` is the single-stream monitor's last image file. It seeds
    the first image target until that target has written its own state.
    """

    model_config = {"extra": "forbid"}

    dir: str = DEFAULT_STATE_DIR
    legacy_path: str | None = DEFAULT_LEGACY_STATE_PATH


class Config(BaseModel):
    """Root configuration model."""

    model_config = {"extra": "forbid"}

    camera_name: str = ""
    targets: list[WatchTargetConfig] = Field(default_factory=_default_targets)
    webhook: WebhookConfig = Field(default_factory=WebhookConfig)
    state: StateConfig = Field(default_factory=StateConfig)
    shutdown_timeout_s: float | None = Field(default=None, gt=0.0)

    @field_validator("targets")
    @classmethod
    def _unique_target_names(cls, targets: list[WatchTargetConfig]) -> list[WatchTargetConfig]:
        names = [target.name for target in targets]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate watch target names: {duplicates}")
        return targets
