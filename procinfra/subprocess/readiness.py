"""
Readiness detection by polling a growing log file.

The watcher reopens the log file on every poll, scans it from the beginning
and stops at the first line containing the pattern. Lines already seen are
simply rescanned; the file only grows while the child is running. Between
unsuccessful scans the watcher sleeps a fixed interval, and the whole wait is
bounded by a deadline on the monotonic clock.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..config.constants import DEFAULT_POLL_INTERVAL, DEFAULT_READINESS_TIMEOUT
from ..exceptions import ReadinessIOError, ReadinessTimeoutError
from ..log.constants import LogConstants

_logger = logging.getLogger("procinfra.readiness")

TRACE = LogConstants.CUSTOM_LEVELS["TRACE"]


def first_match(
    lines: Iterable[str], pattern: str, deadline: float | None = None
) -> str | None:
    """
    Return the first line containing pattern, or None.

    Matching is a plain case-sensitive substring test anywhere in the line.
    When deadline (a time.monotonic() value) passes, the scan is abandoned
    and None is returned.

    Args:
        lines: Lines to scan, in order (trailing newlines are stripped)
        pattern: Substring to look for
        deadline: Optional monotonic deadline bounding the scan
    """
    for line in lines:
        if deadline is not None and time.monotonic() >= deadline:
            return None
        if pattern in line:
            return line.rstrip("\r\n")
    return None


class ReadinessWatcher:
    """
    Polls a log file until a readiness pattern shows up.

    Example:
        watcher = ReadinessWatcher(Path("/tmp/t/etcd.log"), timeout=10.0)
        line = watcher.wait("ready to serve client requests")

    Args:
        log_file: File receiving the child's combined output
        timeout: Seconds to wait, measured from the start of wait()
        interval: Seconds to sleep between unsuccessful scans
        lg: Logger (defaults to the 'procinfra.readiness' logger)
        context: Extra context attached to errors and log records (e.g. cmd)
    """

    def __init__(
        self,
        log_file: Path,
        timeout: float = DEFAULT_READINESS_TIMEOUT,
        interval: float = DEFAULT_POLL_INTERVAL,
        lg: Any | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        self.log_file = Path(log_file)
        self.timeout = timeout
        self.interval = interval
        self._lg = lg if lg is not None else _logger
        self._context = dict(context or {})

    def scan(self, pattern: str, deadline: float | None = None) -> str | None:
        """
        Scan the log file once from the beginning.

        Returns:
            The first matching line, or None when there is none yet (or the
            deadline passed mid-scan)

        Raises:
            ReadinessIOError: If the file cannot be opened or read
        """
        try:
            # Records end at "\n" only; a bare "\r" (progress output) stays in the line
            with open(
                self.log_file, encoding="utf-8", errors="replace", newline="\n"
            ) as f:
                return first_match(f, pattern, deadline)
        except OSError as e:
            raise ReadinessIOError(
                "failed to read log file",
                **self._context,
                log_file=self.log_file,
                error=e,
            ) from e

    def wait(self, pattern: str) -> str:
        """
        Block until a line containing pattern appears in the log file.

        Args:
            pattern: Non-empty substring to look for

        Returns:
            The matching line

        Raises:
            ValueError: If pattern is empty
            ReadinessTimeoutError: If the pattern is not found before the deadline
            ReadinessIOError: If the log file cannot be opened or read
        """
        if not pattern:
            raise ValueError("readiness pattern must not be empty")

        start_t = time.monotonic()
        deadline = start_t + self.timeout
        attempt = 0

        self._lg.debug(
            "waiting for readiness",
            extra={**self._context, "pattern": pattern, "timeout": self.timeout},
        )

        while time.monotonic() < deadline:
            attempt += 1
            line = self.scan(pattern, deadline)
            if line is not None:
                self._lg.debug(
                    "found readiness pattern",
                    extra={
                        **self._context,
                        "pattern": pattern,
                        "line": line,
                        "attempt": attempt,
                        "after": time.monotonic() - start_t,
                    },
                )
                return line

            self._lg.log(
                TRACE,
                "readiness pattern not found yet",
                extra={**self._context, "pattern": pattern, "attempt": attempt},
            )
            time.sleep(self.interval)

        self._lg.warning(
            "timed out waiting for readiness",
            extra={**self._context, "pattern": pattern, "attempt": attempt},
        )
        raise ReadinessTimeoutError(
            "timed out waiting for process to become ready",
            **self._context,
            pattern=pattern,
            timeout=self.timeout,
        )
