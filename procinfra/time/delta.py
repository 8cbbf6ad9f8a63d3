"""
Duration formatting.

Formats elapsed times in the compact form used in log records:

    >>> delta_str(65.2)
    '1m5s'
    >>> delta_str(1.5)
    '1.500s'
    >>> delta_str(0.25)
    '250ms'
"""

import math

from ..exceptions import InvalidDurationError

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60
MILLISECONDS_PER_SECOND = 1000
MICROSECONDS_PER_SECOND = 1_000_000


def _validate_duration_input(secs: float) -> None:
    """
    Validate duration input for formatting.

    Raises:
        InvalidDurationError: If input is not a finite, non-negative number
    """
    if isinstance(secs, bool) or not isinstance(secs, (int, float)):
        raise InvalidDurationError(
            f"Duration must be a number, got {type(secs).__name__}"
        )
    if math.isnan(secs):
        raise InvalidDurationError("Duration cannot be NaN")
    if math.isinf(secs):
        raise InvalidDurationError("Duration cannot be infinite")
    if secs < 0:
        raise InvalidDurationError(f"Duration cannot be negative, got {secs}")


def _format_subsecond(secs: float) -> str:
    """Format durations below one second."""
    if secs < 0.001:
        return f"{int(secs * MICROSECONDS_PER_SECOND)}μs"

    msecs = secs * MILLISECONDS_PER_SECOND
    if msecs < 10:
        return f"{msecs:.3f}".rstrip("0").rstrip(".") + "ms"

    rounded = round(msecs)
    if rounded >= MILLISECONDS_PER_SECOND:
        return "1s"
    return f"{rounded}ms"


def _format_seconds(secs: float) -> str:
    """Format durations between one second and one minute."""
    isecs = int(secs)
    msecs = round((secs - isecs) * MILLISECONDS_PER_SECOND)
    if msecs >= MILLISECONDS_PER_SECOND:
        return f"{isecs + 1}s"
    if msecs > 0 and isecs < 10:
        return f"{isecs}.{msecs:03d}s"
    return f"{isecs}s"


def _format_long(secs: float) -> str:
    """Format durations of one minute or more, always ending in seconds."""
    remaining = int(secs)
    days, remaining = divmod(remaining, SECONDS_PER_DAY)
    hours, remaining = divmod(remaining, SECONDS_PER_HOUR)
    minutes, isecs = divmod(remaining, SECONDS_PER_MINUTE)

    result = ""
    if days > 0:
        result += f"{days}d"
    if hours > 0 or result:
        result += f"{hours}h"
    result += f"{minutes}m{isecs}s"
    return result


def delta_str(secs: float | None) -> str:
    """
    Format a duration in seconds as a compact human-readable string.

    Args:
        secs: Duration in seconds (can be None)

    Returns:
        Formatted duration string, or empty string if secs is None

    Raises:
        InvalidDurationError: If secs is negative, NaN, or infinite

    Format rules:
        - Durations >= 60s: integer seconds, no zero-padding ("1m0s", "1h1m5s")
        - Seconds < 10: 3 decimal places only if non-zero fractional ("1s", "9.123s")
        - Seconds >= 10: no fractional ("10s", "59s")
        - Milliseconds: fractional if < 10ms ("9.123ms"), integer otherwise ("10ms")
        - Microseconds: always integer ("123μs")
    """
    if secs is None:
        return ""

    _validate_duration_input(secs)

    if secs == 0:
        return "0s"
    if secs < 1:
        return _format_subsecond(secs)
    if secs < SECONDS_PER_MINUTE:
        return _format_seconds(secs)
    return _format_long(secs)


__all__ = [
    "delta_str",
    "InvalidDurationError",
]
