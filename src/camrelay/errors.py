"""Error hierarchy for camrelay watch loops."""

from __future__ import annotations


class RelayError(Exception):
    """Base exception for watch loop errors.

    Carries the watch target name so loop-level handlers can log it.
    Preserves stack traces via exception chaining.
    """

    def __init__(self, message: str, target: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.target = target
        self.cause = cause
        self.__cause__ = cause


class TransientScanError(RelayError):
    """Directory listing, glob or stat failed; the cycle is skipped."""

    def __init__(self, target: str, root_dir: str, cause: Exception) -> None:
        super().__init__(f"Scan failed for {target} under {root_dir}", target=target, cause=cause)
        self.root_dir = root_dir


class StateReadError(RelayError):
    """Persisted state exists but cannot be parsed."""

    def __init__(self, target: str, path: str, cause: Exception) -> None:
        super().__init__(f"Corrupt state for {target} at {path}", target=target, cause=cause)
        self.path = path


class StateWriteError(RelayError):
    """Persisting state failed. In-memory state stays authoritative."""

    def __init__(self, target: str, path: str, cause: Exception) -> None:
        super().__init__(f"State write failed for {target} at {path}", target=target, cause=cause)
        self.path = path


class DeliveryError(RelayError):
    """Webhook delivery failed (network error or non-2xx status)."""

    def __init__(
        self,
        target: str,
        url: str,
        cause: Exception,
        status: int | None = None,
    ) -> None:
        detail = f"HTTP {status}" if status is not None else type(cause).__name__
        super().__init__(f"Delivery failed for {target} ({detail})", target=target, cause=cause)
        self.url = url
        self.status = status
