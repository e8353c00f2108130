"""Data models for camrelay."""

from camrelay.models.candidate import Candidate
from camrelay.models.config import (
    Config,
    RetryConfig,
    StateConfig,
    WatchTargetConfig,
    WebhookConfig,
)
from camrelay.models.enums import CycleOutcome, MediaKind, SelectionPolicy, WatcherPhase
from camrelay.models.notification import LastSeenState, Notification

__all__ = [
    "Candidate",
    "Config",
    "CycleOutcome",
    "LastSeenState",
    "MediaKind",
    "Notification",
    "RetryConfig",
    "SelectionPolicy",
    "StateConfig",
    "WatchTargetConfig",
    "WatcherPhase",
    "WebhookConfig",
]
