"""Time utilities: monotonic elapsed-time helpers and duration formatting."""

from .delta import InvalidDurationError, delta_str
from .time import since, since_str, start

__all__ = [
    "delta_str",
    "InvalidDurationError",
    "start",
    "since",
    "since_str",
]
