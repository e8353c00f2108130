"""Interface definitions for camrelay components."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from camrelay.models.notification import LastSeenState, Notification


class Shutdownable(ABC):
    """Async shutdown interface for managed components."""

    @abstractmethod
    async def shutdown(self, timeout: float | None = None) -> None:
        """Release resources and stop background work."""
        raise NotImplementedError


class Notifier(Shutdownable, ABC):
    """Delivers notifications to an external endpoint."""

    @abstractmethod
    async def send(self, notification: Notification, *, target: str = "-") -> bool:
        """Deliver a notification.

        Returns False when delivery is disabled and nothing was sent.
        Raises DeliveryError on failure.
        """
        raise NotImplementedError

    @abstractmethod
    async def ping(self) -> bool:
        """Health check for the delivery endpoint."""
        raise NotImplementedError


class StateStore(ABC):
    """Persists the last seen state of one watch target."""

    @abstractmethod
    async def load(self) -> LastSeenState | None:
        """Return persisted state, or None if absent.

        Raises StateReadError when the stored content is corrupt.
        """
        raise NotImplementedError

    @abstractmethod
    async def save(self, state: LastSeenState) -> None:
        """Overwrite persisted state. Raises StateWriteError on failure."""
        raise NotImplementedError


class MediaSink(ABC):
    """Receives each newly detected file (e.g. a local copy)."""

    @abstractmethod
    async def put(self, source: Path) -> None:
        """Handle a newly detected file."""
        raise NotImplementedError
