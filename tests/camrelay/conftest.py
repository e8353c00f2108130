"""Shared pytest fixtures for camrelay tests."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from pathlib import Path

# Add src to sys.path for imports
src_path = Path(__file__).parent.parent.parent / "src"
if str(src_path.resolve()) not in sys.path:
    sys.path.insert(0, str(src_path.resolve()))

import pytest

from tests.camrelay.mocks import MockNotifier, MockStateStore

MediaWriter = Callable[..., Path]


@pytest.fixture
def media_root(tmp_path: Path) -> Path:
    """Empty camera media root (like /media/mmc/alarm)."""
    root = tmp_path / "alarm"
    root.mkdir()
    return root


@pytest.fixture
def write_media(media_root: Path) -> MediaWriter:
    """Write a media file under `media_root/<folder>/<name>`.

    `mtime` pins the file's modification time so ordering by mtime is
    deterministic regardless of filesystem timestamp resolution.
    """

    def _write(folder: str, name: str, mtime: float | None = None, data: bytes = b"x") -> Path:
        path = media_root / folder / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _write


@pytest.fixture
def mock_notifier() -> MockNotifier:
    return MockNotifier()


@pytest.fixture
def mock_state_store() -> MockStateStore:
    return MockStateStore()
