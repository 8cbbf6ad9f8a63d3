"""
Factory for creating and configuring loggers.
"""

import logging
import sys
from typing import IO, Any

from .config import LogConfig
from .formatters import LogFormatter
from .logger import Logger


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def create_root(config: LogConfig, stream: IO[str] | None = None) -> Logger:
        """
        Create a root logger writing to stdout (or stream).

        Example:
            >>> lg = LoggerFactory.create_root(LogConfig.from_params("debug"))
            >>> lg.info("started", extra={"cmd": "etcd"})
            [12:34:56,789] [I] started                  [cmd:etcd] [1234] [/]
        """
        return LoggerFactory.create("/", config, stream=stream)

    @staticmethod
    def create(
        name: str,
        config: LogConfig,
        extra: dict[str, Any] | None = None,
        stream: IO[str] | None = None,
    ) -> Logger:
        """
        Create a standalone logger with its own console handler.

        Args:
            name: Logger name
            config: Logger configuration
            extra: Pre-populated extra fields to include in all log records
            stream: Output stream (default: sys.stdout)
        """
        lg = Logger(name, config, extra)
        lg.propagate = False

        if config.level is not False:
            handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
            handler.setLevel(config.level)
            handler.setFormatter(LogFormatter(config))
            lg.addHandler(handler)

        return lg

    @staticmethod
    def derive(parent: Logger, name: str, extra: dict[str, Any] | None = None) -> Logger:
        """
        Create a child logger sharing the parent's handlers and extra fields.

        The child is named '<parent>/<name>' and keeps the parent's level.
        """
        base = parent.name.rstrip("/")
        merged = {**parent.extra, **(extra or {})}
        lg = Logger(f"{base}/{name}", parent.config, merged)
        lg.propagate = False
        lg._root_logger = parent._root_logger or parent
        return lg
