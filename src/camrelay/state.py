"""File-backed persistence of per-target last seen state."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from camrelay.errors import StateReadError, StateWriteError
from camrelay.fsutil import make_temp_sibling
from camrelay.interfaces import StateStore
from camrelay.models.notification import LastSeenState

logger = logging.getLogger(__name__)


class FileStateStore(StateStore):
    """Stores one watch target's state as JSON in its own file.

    Also reads the legacy single-stream format, a file holding nothing but
    the last image path. When `fallback` is set and the target has no state
    file yet, the fallback file is read instead. Saves always go to `path`.
    """

    def __init__(self, path: Path, target: str = "-", fallback: Path | None = None) -> None:
        self.path = Path(path)
        self.target = target
        self.fallback = Path(fallback) if fallback else None

    @classmethod
    def for_target(
        cls, state_dir: Path, target: str, fallback: Path | None = None
    ) -> FileStateStore:
        return cls(Path(state_dir) / f"{target}.json", target=target, fallback=fallback)

    async def load(self) -> LastSeenState | None:
        state = await self._read(self.path)
        if state is None and self.fallback is not None and not self.path.exists():
            state = await self._read(self.fallback)
            if state is not None:
                logger.info(
                    "Seeded state from legacy file %s: %s",
                    self.fallback,
                    state.last_path,
                    extra={"target": self.target},
                )
        return state

    async def _read(self, path: Path) -> LastSeenState | None:
        try:
            raw = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise StateReadError(self.target, str(path), exc) from exc
        return self._parse(raw, path)

    async def save(self, state: LastSeenState) -> None:
        payload = state.model_dump_json(indent=2)
        try:
            await asyncio.to_thread(self._write_atomic, payload)
        except OSError as exc:
            raise StateWriteError(self.target, str(self.path), exc) from exc

    def _parse(self, raw: str, path: Path) -> LastSeenState | None:
        text = raw.strip()
        if not text:
            return None

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            if "\n" not in text and not text.startswith(("{", "[")):
                return LastSeenState(last_path=text)
            raise StateReadError(self.target, str(path), exc) from exc

        try:
            return LastSeenState.model_validate(data)
        except ValidationError as exc:
            raise StateReadError(self.target, str(path), exc) from exc

    def _write_atomic(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = make_temp_sibling(self.path)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class StateSession:
    """Scoped handle on a state file: loaded state plus write-back."""

    def __init__(self, store: StateStore, state: LastSeenState | None) -> None:
        self._store = store
        self.state = state

    async def commit(self, state: LastSeenState) -> bool:
        """Persist `state`. Returns False if the write failed.

        The in-memory state is updated even when persistence fails.
        """
        self.state = state
        try:
            await self._store.save(state)
        except StateWriteError as exc:
            logger.error(
                "Failed to persist state: %s",
                exc.cause,
                extra={"target": exc.target},
            )
            return False
        return True


async def open_session(store: StateStore) -> StateSession:
    """Load a target's state for the lifetime of its watch loop.

    A missing file yields an empty session. Corrupt content is logged and
    treated as absent.
    """
    try:
        state = await store.load()
    except StateReadError as exc:
        logger.warning(
            "Ignoring corrupt state file %s: %s",
            exc.path,
            exc.cause,
            extra={"target": exc.target},
        )
        state = None
    return StateSession(store, state)
