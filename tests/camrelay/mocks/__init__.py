"""Mock implementations for testing."""

from tests.camrelay.mocks.notifier import MockNotifier
from tests.camrelay.mocks.state_store import MockStateStore

__all__ = [
    "MockNotifier",
    "MockStateStore",
]
