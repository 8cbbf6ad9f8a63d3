"""
Log formatter rendering structured extra fields.

Output looks like:

    [12:34:56,789] [D] process started          [cmd:etcd] [pid:4242] [1234] [/procinfra]
"""

import logging
import time
from typing import Any

from ..time import delta_str
from .config import LogConfig
from .constants import LogConstants


def _format_value(key: str, value: Any) -> str:
    if key == "after" and isinstance(value, (int, float)) and not isinstance(value, bool):
        return delta_str(value)
    if isinstance(value, BaseException):
        return value.__class__.__name__
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def format_extra(extra: dict[str, Any] | None) -> str:
    """Render extra fields as '[key:value]' items in sorted key order."""
    if not extra:
        return ""
    return " ".join(f"[{key}:{_format_value(key, extra[key])}]" for key in sorted(extra))


class LogFormatter(logging.Formatter):
    """Formatter producing the single-line layout used by all procinfra loggers."""

    def __init__(self, config: LogConfig | None = None) -> None:
        super().__init__(LogConstants.DEFAULT_FORMAT)
        self._config = config or LogConfig()

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        base = time.strftime(LogConstants.MICROS_DATEFMT, self.converter(record.created))
        if self._config.micros:
            micros = int((record.created % 1) * 1_000_000)
            return f"{base}.{micros:06d}"
        return f"{base},{int(record.msecs):03d}"

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        record.asctime = self.formatTime(record)
        line = self.formatMessage(record)

        extra = format_extra(getattr(record, LogConstants.EXTRA_ATTR, None))
        if extra:
            line += " " * max(1, LogConstants.DEFAULT_RULE_WIDTH - len(line)) + extra

        line += f" [{record.process}] [{record.name}]"

        if record.exc_info:
            if not record.exc_text:
                record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            line += "\n" + record.exc_text
        return line
