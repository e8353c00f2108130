"""Main application that wires watch loops together."""

from __future__ import annotations

import asyncio
import logging
import signal
from pathlib import Path

from camrelay.interfaces import MediaSink, Notifier
from camrelay.models.config import Config, WatchTargetConfig
from camrelay.models.enums import MediaKind
from camrelay.notifiers import WebhookNotifier
from camrelay.sinks import LatestFileCopySink
from camrelay.state import FileStateStore
from camrelay.watchers import TargetWatcher

logger = logging.getLogger(__name__)


class Application:
    """Runs one watcher per target until SIGINT/SIGTERM.

    Handles component creation, lifecycle, and graceful shutdown.
    """

    def __init__(self, config: Config, notifier: Notifier | None = None) -> None:
        self._config = config
        self._notifier: Notifier = notifier or WebhookNotifier(config.webhook)
        self._watchers: list[TargetWatcher] = []

        # Shutdown state
        self._shutdown_event = asyncio.Event()
        self._shutdown_started = False

    @property
    def watchers(self) -> list[TargetWatcher]:
        return list(self._watchers)

    async def run(self) -> None:
        """Start all watchers and block until a shutdown signal arrives."""
        config = self._config
        logger.info("Starting camrelay for camera %s", config.camera_name)
        if config.webhook.enabled:
            await self._log_notifier_health()
        else:
            logger.info("No webhook URL configured, delivery disabled")

        self._watchers = [self._create_watcher(target) for target in config.targets]
        self._setup_signal_handlers()

        for watcher in self._watchers:
            await watcher.start()

        logger.info("Watching %d target(s)", len(self._watchers))
        await self._shutdown_event.wait()
        await self.shutdown()

    def request_shutdown(self) -> None:
        self._shutdown_started = True
        self._shutdown_event.set()

    async def shutdown(self) -> None:
        """Let every watcher finish its current cycle, then close delivery."""
        logger.info("Shutting down, waiting for in-flight cycles...")
        timeout = self._config.shutdown_timeout_s
        await asyncio.gather(*(watcher.shutdown(timeout) for watcher in self._watchers))
        await self._notifier.shutdown()
        logger.info("Shutdown complete")

    async def _log_notifier_health(self) -> None:
        """Check the webhook once at startup. Unreachable is logged, not fatal."""
        try:
            ok = await self._notifier.ping()
        except Exception as err:
            logger.error("Webhook ping failed at startup: error=%s", err)
            return

        if ok:
            logger.info("Webhook reachable at startup")
        else:
            logger.error("Webhook unreachable at startup, will keep trying on each detection")

    def _create_watcher(self, target: WatchTargetConfig) -> TargetWatcher:
        sinks: list[MediaSink] = []
        if target.copy_latest_to:
            sinks.append(LatestFileCopySink(Path(target.copy_latest_to)))

        state = self._config.state
        fallback = None
        if state.legacy_path and target.name == self._legacy_target_name():
            fallback = Path(state.legacy_path)

        return TargetWatcher(
            target,
            camera_name=self._config.camera_name,
            notifier=self._notifier,
            state_store=FileStateStore.for_target(Path(state.dir), target.name, fallback=fallback),
            sinks=sinks,
        )

    def _legacy_target_name(self) -> str | None:
        # The legacy file only ever tracked images.
        for target in self._config.targets:
            if target.kind == MediaKind.IMAGE:
                return target.name
        return None

    def _setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown."""
        loop = asyncio.get_running_loop()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, self._handle_signal, sig)

    def _handle_signal(self, sig: signal.Signals) -> None:
        """Handle shutdown signal."""
        if self._shutdown_started:
            logger.warning("Shutdown already in progress, ignoring signal")
            return

        logger.info("Received signal %s, initiating shutdown...", sig.name)
        self.request_shutdown()
