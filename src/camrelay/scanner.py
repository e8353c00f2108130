"""Directory scanner that finds the latest media file under a watch root."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path

from anyio import Path as AsyncPath

from camrelay.errors import TransientScanError
from camrelay.models.candidate import Candidate
from camrelay.models.config import WatchTargetConfig
from camrelay.models.enums import SelectionPolicy

logger = logging.getLogger(__name__)


def select_latest_directory(names: Iterable[str]) -> str | None:
    """Return the greatest directory name.

    Timestamp-prefixed names (e.g. `20230201`) sort chronologically.
    """
    ordered = sorted(names, reverse=True)
    return ordered[0] if ordered else None


def select_latest_file(paths: Iterable[str]) -> str | None:
    """Return the last path in ascending string order.

    Ordering is lexicographic, not numeric: `a2.jpg` sorts after `a10.jpg`.
    Camera file names are zero-padded, so this matches creation order there.
    """
    ordered = sorted(paths)
    return ordered[-1] if ordered else None


class DirectoryScanner:
    """Finds the latest candidate for one watch target.

    Uses anyio for non-blocking filesystem operations (iterdir, glob, stat)
    so a slow SD card does not stall the other watch loops.
    """

    def __init__(self, target: WatchTargetConfig) -> None:
        self.target = target
        self.root = Path(target.root_dir)

    async def scan(self) -> Candidate | None:
        """Return the latest matching file, or None if there is none.

        Raises:
            TransientScanError: If listing, globbing or stat fails or times out
        """
        try:
            if self.target.scan_timeout_s is None:
                return await self._scan()
            return await asyncio.wait_for(self._scan(), timeout=self.target.scan_timeout_s)
        except asyncio.TimeoutError as exc:
            raise TransientScanError(self.target.name, str(self.root), exc) from exc
        except OSError as exc:
            raise TransientScanError(self.target.name, str(self.root), exc) from exc

    async def _scan(self) -> Candidate | None:
        match self.target.policy:
            case SelectionPolicy.NAME:
                return await self._latest_by_name()
            case SelectionPolicy.MTIME:
                return await self._latest_by_mtime()
        raise ValueError(f"Unknown selection policy: {self.target.policy}")

    async def _latest_by_name(self) -> Candidate | None:
        root = AsyncPath(self.root)
        subdirs = [entry.name async for entry in root.iterdir() if await entry.is_dir()]
        latest_dir = select_latest_directory(subdirs)
        if latest_dir is None:
            return None

        files = [str(match) async for match in (root / latest_dir).glob(self.target.pattern)]
        latest = select_latest_file(files)
        if latest is None:
            return None

        try:
            stat_info = await AsyncPath(latest).stat()
        except FileNotFoundError:
            logger.debug("Latest file vanished before stat: %s", latest)
            return None
        return Candidate(path=Path(latest), mtime=stat_info.st_mtime)

    async def _latest_by_mtime(self) -> Candidate | None:
        root = AsyncPath(self.root)
        if not await root.is_dir():
            raise FileNotFoundError(f"Watch root is not a directory: {self.root}")

        best: Candidate | None = None
        async for match in root.glob(f"*/{self.target.pattern}"):
            try:
                stat_info = await match.stat()
            except FileNotFoundError:
                continue
            candidate = Candidate(path=Path(match), mtime=stat_info.st_mtime)
            if best is None or (candidate.mtime, str(candidate.path)) > (
                best.mtime,
                str(best.path),
            ):
                best = candidate
        return best
