"""
Logging for procinfra.

Extends Python's standard logging with:
- A custom TRACE level below DEBUG
- Structured extra fields rendered as [key:value]
- Derived loggers sharing their root's handlers
- Complete logging disable (level=False or "false")
"""

import logging
from typing import Any

from ..exceptions import InvalidLogLevelError
from .config import LogConfig, resolve_level
from .constants import LogConstants
from .factory import LoggerFactory
from .formatters import LogFormatter, format_extra
from .logger import Logger

logging.TRACE = LogConstants.CUSTOM_LEVELS["TRACE"]  # type: ignore[attr-defined]
logging.addLevelName(logging.TRACE, "TRACE")  # type: ignore[attr-defined]


def create_lg(level: str | int | bool = "info", micros: bool = False, name: str = "/") -> Logger:
    """
    Create a logger with the specified level.

    Example:
        >>> lg = create_lg("debug")
        >>> lg.debug("spawned", extra={"pid": 4242})
    """
    return LoggerFactory.create(name, LogConfig.from_params(level, micros=micros))


def create_lg_from_config(config: Any, name: str = "/", section: str = "log") -> Logger:
    """
    Create a logger from a Config (or any DotDict) section.

    Args:
        config: Configuration exposing dict()
        name: Logger name
        section: Section holding level/micros (default: "log")
    """
    return LoggerFactory.create(name, LogConfig.from_config(config.dict(), section))


__all__ = [
    "Logger",
    "LogConfig",
    "LogConstants",
    "LogFormatter",
    "LoggerFactory",
    "InvalidLogLevelError",
    "create_lg",
    "create_lg_from_config",
    "format_extra",
    "resolve_level",
]
