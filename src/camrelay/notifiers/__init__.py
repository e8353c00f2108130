"""Notification delivery backends."""

from camrelay.notifiers.webhook import WebhookNotifier

__all__ = ["WebhookNotifier"]
