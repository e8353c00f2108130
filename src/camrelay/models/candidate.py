"""Scan result types."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Candidate:
    """A file discovered during a scan cycle."""

    path: Path
    mtime: float
