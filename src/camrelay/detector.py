"""Change detection and notification deduplication."""

from __future__ import annotations

from camrelay.models.candidate import Candidate
from camrelay.models.enums import SelectionPolicy
from camrelay.models.notification import LastSeenState, Notification


class ChangeDetector:
    """Decides whether a scanned candidate moves the target's state forward."""

    def __init__(self, policy: SelectionPolicy) -> None:
        self.policy = policy

    def is_newer(self, candidate: Candidate, state: LastSeenState | None) -> bool:
        if state is None:
            return True
        if self.policy is SelectionPolicy.NAME:
            return str(candidate.path) > state.last_path
        return candidate.mtime > state.last_modified


class Deduplicator:
    """Suppresses a notification identical to the last delivered one."""

    def __init__(self, last: Notification | None = None) -> None:
        self._last = last

    @property
    def last(self) -> Notification | None:
        return self._last

    def is_duplicate(self, notification: Notification) -> bool:
        return notification.matches(self._last)

    def remember(self, notification: Notification) -> None:
        self._last = notification
