"""Optional sinks run for each newly detected file."""

from camrelay.sinks.local_copy import LatestFileCopySink

__all__ = ["LatestFileCopySink"]
