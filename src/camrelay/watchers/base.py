"""Shared lifecycle for async polling loops."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

from camrelay.interfaces import Shutdownable

logger = logging.getLogger(__name__)


class AsyncPoller(Shutdownable, ABC):
    """Base class for loops that run as async tasks.

    Stopping is cooperative: `shutdown()` sets a stop event which the loop
    checks only between cycles, so an in-flight cycle always finishes.
    """

    def __init__(self, poll_interval_s: float = 1.0) -> None:
        self.poll_interval_s = float(poll_interval_s)
        self._task: asyncio.Task[None] | None = None
        self._stop_event = asyncio.Event()
        self._started = False

    async def start(self) -> None:
        """Start polling in a background task."""
        if self._task is not None:
            logger.warning("%s already started", self.__class__.__name__)
            return

        self._started = True
        self._stop_event.clear()
        self._task = asyncio.create_task(self._run_wrapper())

    async def shutdown(self, timeout: float | None = None) -> None:
        """Ask the loop to stop and wait for the current cycle to finish.

        With `timeout=None` there is no deadline on the in-flight cycle.
        Otherwise the task is cancelled once the deadline passes.
        """
        task = self._task
        if task is None:
            return

        self._stop_event.set()

        if not task.done():
            if timeout is None:
                await task
            else:
                try:
                    await asyncio.wait_for(asyncio.shield(task), timeout=timeout)
                except asyncio.TimeoutError:
                    logger.warning(
                        "%s shutdown timed out, cancelling task", self.__class__.__name__
                    )
                    task.cancel()
                    try:
                        await task
                    except asyncio.CancelledError:
                        pass

        if self._task is task:
            self._task = None

    @property
    def stopping(self) -> bool:
        return self._stop_event.is_set()

    def is_healthy(self) -> bool:
        """Task is running (if started)."""
        if self._task is None:
            return not self._started
        return not self._task.done()

    async def _sleep_interval(self) -> None:
        """Wait one poll interval, returning early if a stop was requested."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=self.poll_interval_s)
        except asyncio.TimeoutError:
            pass  # Normal - just means poll_interval elapsed

    async def _run_wrapper(self) -> None:
        try:
            await self._run()
        except Exception:
            logger.exception("%s stopped unexpectedly", self.__class__.__name__)
        finally:
            self._task = None

    @abstractmethod
    async def _run(self) -> None:
        """Async task entrypoint."""
        raise NotImplementedError
