"""
Configuration for loggers.

LogConfig is immutable so a logger's settings cannot drift after creation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..exceptions import InvalidLogLevelError
from .constants import LogConstants


def resolve_level(level: str | int | bool) -> int | bool:
    """
    Resolve log level from string, numeric value, or boolean.

    Args:
        level: Level name ("trace", "debug", ...), numeric value, or False
            (or "false") to disable logging

    Returns:
        Numeric log level, or False to disable logging

    Raises:
        InvalidLogLevelError: If the log level is invalid
    """
    if isinstance(level, bool):
        return logging.INFO if level else False

    if isinstance(level, int):
        return level

    if isinstance(level, str):
        if level.isnumeric():
            return int(level)
        name = level.lower()
        if name in LogConstants.LEVEL_NAMES:
            return LogConstants.LEVEL_NAMES[name]

    raise InvalidLogLevelError(level)


@dataclass(frozen=True)
class LogConfig:
    """
    Immutable logger configuration.

    Attributes:
        level: Numeric level, or False to disable logging
        micros: Whether timestamps carry microseconds
    """

    level: int | bool = logging.INFO
    micros: bool = False

    @classmethod
    def from_params(cls, level: str | int | bool = "info", micros: bool = False) -> LogConfig:
        """Create LogConfig from individual parameters."""
        return cls(level=resolve_level(level), micros=micros)

    @classmethod
    def from_config(cls, config_dict: dict[str, Any], section: str = "log") -> LogConfig:
        """
        Create LogConfig from a configuration dictionary.

        Args:
            config_dict: Configuration dictionary (e.g., Config.dict())
            section: Dot-separated section holding level/micros (default: "log")

        Example:
            config = Config("etc/procinfra.yaml")
            log_config = LogConfig.from_config(config.dict())
        """
        current: Any = config_dict
        for part in section.split("."):
            current = current.get(part) if isinstance(current, dict) else None
        if not isinstance(current, dict):
            current = {}

        return cls.from_params(
            level=current.get("level", "info"),
            micros=bool(current.get("micros", False)),
        )
