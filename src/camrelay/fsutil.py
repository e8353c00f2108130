"""Filesystem helpers shared by the state store and the copy sink."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def current_umask() -> int:
    # os.umask only reports the old value by setting a new one.
    mask = os.umask(0)
    os.umask(mask)
    return mask


def make_temp_sibling(dest: Path) -> tuple[int, str]:
    """Create a temp file next to `dest` for an atomic replace.

    mkstemp creates files as 0600. The mode is reset to what a plain open()
    would have produced so the replaced file stays readable by other users.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{dest.name}.", suffix=".tmp", dir=dest.parent)
    try:
        os.fchmod(fd, 0o666 & ~current_umask())
    except OSError:
        os.close(fd)
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return fd, tmp_name
