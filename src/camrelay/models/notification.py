"""Notification payload and persisted per-target state."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from camrelay.models.enums import MediaKind


class Notification(BaseModel):
    """Message describing a newly detected media file.

    Wire form uses camelCase keys (`cameraName`, `jpgPath`, `mp4Path`).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    camera_name: str = Field(alias="cameraName")
    jpg_path: str | None = Field(default=None, alias="jpgPath")
    mp4_path: str | None = Field(default=None, alias="mp4Path")

    @classmethod
    def for_file(cls, camera_name: str, kind: MediaKind, path: str) -> Notification:
        if kind is MediaKind.IMAGE:
            return cls(camera_name=camera_name, jpg_path=path)
        return cls(camera_name=camera_name, mp4_path=path)

    def to_wire(self) -> dict[str, str | None]:
        """Serialize to the JSON body sent to the webhook."""
        return self.model_dump(mode="json", by_alias=True)

    def matches(self, other: Notification | None) -> bool:
        """Return True if every populated field equals the one in `other`."""
        if other is None:
            return False
        if self.camera_name != other.camera_name:
            return False
        if self.jpg_path is not None and self.jpg_path != other.jpg_path:
            return False
        if self.mp4_path is not None and self.mp4_path != other.mp4_path:
            return False
        return True


class LastSeenState(BaseModel):
    """Latest file observed for one watch target."""

    last_path: str
    last_modified: float = 0.0
    notification: Notification | None = None
