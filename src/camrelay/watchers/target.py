"""Poll loop for a single watch target."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from camrelay.detector import ChangeDetector, Deduplicator
from camrelay.errors import DeliveryError, TransientScanError
from camrelay.interfaces import MediaSink, Notifier, StateStore
from camrelay.models.candidate import Candidate
from camrelay.models.config import WatchTargetConfig
from camrelay.models.enums import CycleOutcome, WatcherPhase
from camrelay.models.notification import LastSeenState, Notification
from camrelay.scanner import DirectoryScanner
from camrelay.state import StateSession, open_session
from camrelay.watchers.base import AsyncPoller

logger = logging.getLogger(__name__)


class TargetWatcher(AsyncPoller):
    """Watches one target and relays a notification for each new latest file.

    Each cycle moves through idle -> scanning -> (no_change | detected) -> idle.
    On detection the sinks run, delivery is attempted, and the new state is
    persisted whatever the delivery outcome was.
    """

    def __init__(
        self,
        target: WatchTargetConfig,
        *,
        camera_name: str,
        notifier: Notifier,
        state_store: StateStore,
        sinks: Sequence[MediaSink] = (),
        scanner: DirectoryScanner | None = None,
    ) -> None:
        super().__init__(poll_interval_s=target.poll_interval_s)
        self.target = target
        self.camera_name = camera_name
        self.phase = WatcherPhase.IDLE
        self._notifier = notifier
        self._store = state_store
        self._sinks = list(sinks)
        self._scanner = scanner or DirectoryScanner(target)
        self._detector = ChangeDetector(target.policy)
        self._dedup = Deduplicator()
        self._session: StateSession | None = None
        self._scan_failures = 0

    @property
    def name(self) -> str:
        return self.target.name

    @property
    def state(self) -> LastSeenState | None:
        return self._session.state if self._session else None

    async def restore(self) -> None:
        """Load persisted state; runs once before the first cycle."""
        self._session = await open_session(self._store)
        state = self._session.state
        if state is None:
            logger.info("No previous state, every file is new", extra=self._log_extra())
            return

        last = state.notification
        if last is None:
            last = Notification.for_file(self.camera_name, self.target.kind, state.last_path)
        self._dedup = Deduplicator(last)
        logger.info(
            "Restored last seen file: %s",
            state.last_path,
            extra=self._log_extra(),
        )

    async def run_cycle(self) -> CycleOutcome:
        """Run exactly one scan/detect/relay cycle."""
        if self._session is None:
            await self.restore()
        assert self._session is not None

        self.phase = WatcherPhase.SCANNING
        try:
            try:
                candidate = await self._scanner.scan()
            except TransientScanError as exc:
                self._log_scan_failure(exc)
                return CycleOutcome.SCAN_FAILED
            self._scan_failures = 0

            if candidate is None or not self._detector.is_newer(candidate, self._session.state):
                self.phase = WatcherPhase.NO_CHANGE
                return CycleOutcome.NO_CHANGE

            notification = Notification.for_file(
                self.camera_name, self.target.kind, str(candidate.path)
            )
            new_state = LastSeenState(
                last_path=str(candidate.path),
                last_modified=candidate.mtime,
                notification=notification,
            )

            if self._dedup.is_duplicate(notification):
                # Same file rewritten in place: advance the high-water mark only.
                self._session.state = new_state
                self.phase = WatcherPhase.NO_CHANGE
                logger.debug(
                    "Suppressed duplicate notification for %s",
                    candidate.path,
                    extra=self._log_extra(),
                )
                return CycleOutcome.DUPLICATE

            self.phase = WatcherPhase.DETECTED
            logger.info(
                "New %s detected: %s",
                self.target.kind,
                candidate.path,
                extra=self._log_extra(),
            )
            await self._run_sinks(candidate)
            await self._deliver(notification)
            self._dedup.remember(notification)
            await self._session.commit(new_state)
            return CycleOutcome.DETECTED
        finally:
            self.phase = WatcherPhase.IDLE

    async def _run(self) -> None:
        logger.info(
            "Watch loop started: root=%s pattern=%s policy=%s",
            self.target.root_dir,
            self.target.pattern,
            self.target.policy,
            extra=self._log_extra(),
        )
        if self._session is None:
            await self.restore()

        while not self._stop_event.is_set():
            try:
                await self.run_cycle()
            except Exception as exc:
                logger.error(
                    "Error in watch loop: %s", exc, exc_info=True, extra=self._log_extra()
                )
            await self._sleep_interval()

        logger.info("Watch loop exited", extra=self._log_extra())

    async def _run_sinks(self, candidate: Candidate) -> None:
        for sink in self._sinks:
            try:
                await sink.put(candidate.path)
            except Exception as exc:
                logger.error(
                    "Sink %s failed for %s: %s",
                    type(sink).__name__,
                    candidate.path,
                    exc,
                    exc_info=True,
                    extra=self._log_extra(),
                )

    async def _deliver(self, notification: Notification) -> None:
        try:
            sent = await self._notifier.send(notification, target=self.name)
        except DeliveryError as exc:
            logger.error(
                "Webhook delivery failed: %s",
                exc.cause,
                extra=self._log_extra(status=exc.status),
            )
            return
        except Exception as exc:
            logger.error(
                "Notifier raised unexpectedly: %s", exc, exc_info=True, extra=self._log_extra()
            )
            return

        if sent:
            logger.info(
                "Sent webhook for %s",
                notification.jpg_path or notification.mp4_path,
                extra=self._log_extra(),
            )

    def _log_scan_failure(self, exc: TransientScanError) -> None:
        self._scan_failures += 1
        level = logging.WARNING if self._scan_failures == 1 else logging.DEBUG
        logger.log(
            level,
            "Scan failed (%d consecutive): %s",
            self._scan_failures,
            exc.cause,
            extra=self._log_extra(),
        )

    def _log_extra(self, **fields: object) -> dict[str, object]:
        return {"target": self.name, **fields}
