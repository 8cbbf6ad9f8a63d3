"""Monotonic timing helpers."""

import time

from .delta import delta_str


def start() -> float:
    """
    Get the current monotonic time for elapsed-time measurement.

    Returns:
        float: Current monotonic time in seconds
    """
    return time.monotonic()


def since(start_t: float) -> float:
    """
    Calculate elapsed time since a start time.

    Args:
        start_t (float): Start time from time.monotonic() or start()

    Returns:
        float: Elapsed time in seconds
    """
    return time.monotonic() - start_t


def since_str(start_t: float) -> str:
    """Elapsed time since start_t, formatted with delta_str()."""
    return delta_str(since(start_t))
