"""Polling loops."""

from camrelay.watchers.base import AsyncPoller
from camrelay.watchers.target import TargetWatcher

__all__ = ["AsyncPoller", "TargetWatcher"]
