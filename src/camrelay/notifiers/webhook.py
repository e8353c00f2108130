"""Webhook notifier: POSTs notifications as JSON."""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from camrelay.errors import DeliveryError
from camrelay.interfaces import Notifier
from camrelay.models.config import WebhookConfig
from camrelay.models.notification import Notification

logger = logging.getLogger(__name__)


class WebhookNotifier(Notifier):
    """Deliver notifications to a single webhook endpoint.

    TLS certificate validation follows `verify_tls`; it is off by default so
    cameras can post to self-signed endpoints on the local network.
    """

    def __init__(self, config: WebhookConfig) -> None:
        self._config = config
        self._url = config.url
        self._session: aiohttp.ClientSession | None = None
        self._shutdown_called = False
        self._max_attempts = max(1, int(config.retry.max_attempts))
        self._backoff_s = max(0.0, float(config.retry.backoff_s))

        if not config.verify_tls and self._url and self._url.startswith("https://"):
            logger.info("TLS certificate validation disabled for %s", self._url)

    @property
    def enabled(self) -> bool:
        return bool(self._url)

    async def send(self, notification: Notification, *, target: str = "-") -> bool:
        """POST the notification. Returns False if no endpoint is configured."""
        if self._shutdown_called:
            raise RuntimeError("Notifier has been shut down")
        if not self._url:
            logger.debug("Webhook URL not configured, skipping delivery")
            return False

        attempt = 1
        while True:
            try:
                await self._post(notification, target)
                return True
            except DeliveryError as exc:
                if attempt >= self._max_attempts:
                    raise
                logger.warning(
                    "Webhook delivery failed for %s (attempt %d/%d): %s",
                    target,
                    attempt,
                    self._max_attempts,
                    exc,
                )
                delay = self._backoff_s * (2 ** (attempt - 1))
                if delay > 0:
                    await asyncio.sleep(delay)
                attempt += 1

    async def ping(self) -> bool:
        """Health check - the endpoint answers at all (any status)."""
        if self._shutdown_called or not self._url:
            return False

        session = await self._get_session()
        try:
            async with session.head(self._url, ssl=self._ssl()) as response:
                await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Webhook ping failed: %s", exc)
            return False
        return True

    async def shutdown(self, timeout: float | None = None) -> None:
        """Cleanup resources - close HTTP session."""
        _ = timeout
        if self._shutdown_called:
            return
        self._shutdown_called = True

        if self._session and not self._session.closed:
            await self._session.close()

    async def _post(self, notification: Notification, target: str) -> None:
        assert self._url is not None
        session = await self._get_session()
        try:
            async with session.post(
                self._url, json=notification.to_wire(), ssl=self._ssl()
            ) as response:
                if not 200 <= response.status < 300:
                    details = await response.text()
                    raise DeliveryError(
                        target,
                        self._url,
                        RuntimeError(f"HTTP {response.status}: {details}"),
                        status=response.status,
                    )
                await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise DeliveryError(target, self._url, exc) from exc

    def _ssl(self) -> bool:
        # True keeps aiohttp's default certificate validation.
        return self._config.verify_tls

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._config.timeout_s)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session
