"""Sink that keeps a copy of the latest detected file at a fixed path."""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from pathlib import Path

from camrelay.fsutil import make_temp_sibling
from camrelay.interfaces import MediaSink

logger = logging.getLogger(__name__)


class LatestFileCopySink(MediaSink):
    """Copy each new file over `dest`, replacing it atomically."""

    def __init__(self, dest: Path) -> None:
        self.dest = Path(dest)

    async def put(self, source: Path) -> None:
        await asyncio.to_thread(self._copy, Path(source))
        logger.info("Copied latest file to %s", self.dest, extra={"source": str(source)})

    def _copy(self, source: Path) -> None:
        self.dest.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = make_temp_sibling(self.dest)
        os.close(fd)
        try:
            shutil.copyfile(source, tmp_name)
            os.replace(tmp_name, self.dest)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
