"""Mock notifier for testing."""

from __future__ import annotations

import asyncio

from camrelay.errors import DeliveryError
from camrelay.models.notification import Notification


class MockNotifier:
    """Mock implementation of Notifier interface for testing.

    Tracks all sent notifications in a list for test assertions.
    Supports configurable failure injection, a disabled endpoint and delays.
    """

    def __init__(
        self,
        simulate_failure: bool = False,
        enabled: bool = True,
        delay_s: float = 0.0,
    ) -> None:
        """Initialize mock notifier.

        Args:
            simulate_failure: If True, send() raises DeliveryError (HTTP 500)
            enabled: If False, send() skips delivery and returns False
            delay_s: Artificial delay before returning
        """
        self.simulate_failure = simulate_failure
        self.enabled = enabled
        self.delay_s = delay_s
        self.attempts: list[Notification] = []
        self.sent: list[Notification] = []
        self.shutdown_called = False
        self.ping_calls = 0

    async def send(self, notification: Notification, *, target: str = "-") -> bool:
        """Send notification (mock implementation - stores in list)."""
        if self.delay_s > 0:
            await asyncio.sleep(self.delay_s)
        if not self.enabled:
            return False

        self.attempts.append(notification)
        if self.simulate_failure:
            raise DeliveryError(
                target,
                "http://mock",
                RuntimeError("Simulated delivery failure"),
                status=500,
            )

        self.sent.append(notification)
        return True

    async def ping(self) -> bool:
        """Health check (mock implementation)."""
        self.ping_calls += 1
        return self.enabled and not self.simulate_failure

    async def shutdown(self, timeout: float | None = None) -> None:
        """Cleanup resources (no-op for mock)."""
        _ = timeout
        self.shutdown_called = True
