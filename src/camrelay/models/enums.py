"""Centralized enums for type safety and IDE support."""

from enum import StrEnum


class MediaKind(StrEnum):
    """Kind of media a watch target looks for."""

    IMAGE = "image"
    VIDEO = "video"

    @property
    def default_pattern(self) -> str:
        return "*.jpg" if self is MediaKind.IMAGE else "*.mp4"


class SelectionPolicy(StrEnum):
    """How the scanner decides which candidate is the latest.

    NAME: newest subdirectory by name, then last file by ascending name.
    MTIME: newest modification time across all subdirectories.
    """

    NAME = "name"
    MTIME = "mtime"


class WatcherPhase(StrEnum):
    """Per-target poll loop state."""

    IDLE = "idle"
    SCANNING = "scanning"
    NO_CHANGE = "no_change"
    DETECTED = "detected"


class CycleOutcome(StrEnum):
    """Result of a single poll cycle."""

    NO_CHANGE = "no_change"
    DUPLICATE = "duplicate"
    DETECTED = "detected"
    SCAN_FAILED = "scan_failed"
