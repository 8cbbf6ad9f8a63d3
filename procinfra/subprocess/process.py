"""
Handle owning one spawned child process and its log file.

The child's stdout and stderr are both redirected into a single log file
'<log_dir>/<executable>.log'. Readiness is detected by polling that file
for a pattern (see ReadinessWatcher), and the child is killed on stop().

Example:
    config = Config(data={"log": {"dir": "/tmp/t"}})
    with ProcessHandle.start(config, ["etcd", "--data-dir", "/tmp/etcd"]) as proc:
        proc.wait_ready("ready to serve client requests")
        ...
    # leaving the block kills and reaps the child
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import weakref
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..config.constants import DEFAULT_POLL_INTERVAL, DEFAULT_READINESS_TIMEOUT
from ..exceptions import (
    ConfigError,
    InvalidCommandError,
    SignalError,
    SpawnError,
    WaitTimeoutError,
)
from .readiness import ReadinessWatcher

_logger = logging.getLogger("procinfra.process")


def _lookup(config: Any, path: str, default: Any = None) -> Any:
    """Resolve a dot-separated path on a Config, dict or attribute object."""
    cur = config
    for part in path.split("."):
        cur = cur.get(part) if isinstance(cur, dict) else getattr(cur, part, None)
        if cur is None:
            return default
    return cur


def _positive_setting(config: Any, path: str, default: float) -> float:
    """Read an optional positive number of seconds from config."""
    raw = _lookup(config, path, default)
    try:
        value = float(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError("setting must be a number", key=path, value=raw) from e
    if isinstance(raw, bool) or not value > 0:
        raise ConfigError("setting must be a positive number", key=path, value=raw)
    return value


def _release(child: subprocess.Popen) -> None:
    """Kill the child if it is still running, then reap it."""
    if child.poll() is None:
        child.kill()
    child.wait()


class ProcessHandle:
    """
    Exclusive owner of one live child process.

    Created by start(); wait_ready() may be called while the child runs;
    stop() kills it. The child is always killed and reaped eventually:
    by close(), by leaving a with-block, or by a finalizer when the handle
    is garbage collected or the interpreter exits.

    Calling wait_ready() before start() or after stop() is a usage error
    and is not checked.
    """

    def __init__(
        self,
        command: str,
        child: subprocess.Popen,
        log_file: Path,
        lg: Any | None = None,
        timeout: float = DEFAULT_READINESS_TIMEOUT,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """
        Wrap an already spawned child. Use start() to spawn one.

        Args:
            command: Descriptive command string, for diagnostics only
            child: The spawned process, now owned by this handle
            log_file: File receiving the child's combined output
            lg: Logger (defaults to the 'procinfra.process' logger)
            timeout: Default readiness timeout in seconds
            interval: Default poll interval in seconds
        """
        self._command = command
        self._child = child
        self._log_file = Path(log_file)
        self._lg = lg if lg is not None else _logger
        self.timeout = timeout
        self.interval = interval
        self._finalizer = weakref.finalize(self, _release, child)

    @classmethod
    def start(
        cls, config: Any, command: Sequence[str], lg: Any | None = None
    ) -> ProcessHandle:
        """
        Spawn command with its output captured in '<log.dir>/<executable>.log'.

        Args:
            config: Configuration exposing log.dir, and optionally
                readiness.timeout and readiness.interval
            command: Executable followed by its arguments
            lg: Logger for this handle

        Returns:
            A handle owning the running child

        Raises:
            InvalidCommandError: If command is empty or a plain string
            ConfigError: If config has no log.dir, or readiness settings
                are not positive numbers
            SpawnError: If the log file cannot be created or the executable
                cannot be launched
        """
        if isinstance(command, (str, bytes)):
            raise InvalidCommandError(
                "command must be a sequence of arguments, not a string",
                command=command,
            )
        argv = [str(arg) for arg in command]
        if not argv:
            raise InvalidCommandError("no valid command provided")

        log_dir = _lookup(config, "log.dir")
        if log_dir is None:
            raise ConfigError("log directory not configured", key="log.dir")
        timeout = _positive_setting(config, "readiness.timeout", DEFAULT_READINESS_TIMEOUT)
        interval = _positive_setting(config, "readiness.interval", DEFAULT_POLL_INTERVAL)

        lg = lg if lg is not None else _logger
        cmd = shlex.join(argv)
        log_file = Path(log_dir) / f"{Path(argv[0]).name}.log"

        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            out = open(log_file, "wb")
        except OSError as e:
            raise SpawnError(
                "failed to create log file", cmd=cmd, log_file=log_file, error=e
            ) from e

        # The child keeps its own descriptor; the parent's copy closes here
        with out:
            try:
                child = subprocess.Popen(
                    argv,
                    stdin=subprocess.DEVNULL,
                    stdout=out,
                    stderr=subprocess.STDOUT,
                    close_fds=True,
                )
            except (OSError, ValueError) as e:
                lg.error("failed to spawn process", extra={"cmd": cmd, "exception": e})
                raise SpawnError("failed to spawn process", cmd=cmd, error=e) from e

        lg.debug(
            "process started",
            extra={"cmd": cmd, "pid": child.pid, "log_file": log_file},
        )
        return cls(
            cmd,
            child,
            log_file,
            lg=lg,
            timeout=timeout,
            interval=interval,
        )

    @property
    def command(self) -> str:
        return self._command

    @property
    def child(self) -> subprocess.Popen:
        return self._child

    @property
    def log_file(self) -> Path:
        return self._log_file

    @property
    def pid(self) -> int:
        return self._child.pid

    @property
    def returncode(self) -> int | None:
        """Exit code once the child has been reaped, None while running."""
        return self._child.poll()

    def is_running(self) -> bool:
        return self._child.poll() is None

    def wait_ready(
        self,
        pattern: str,
        timeout: float | None = None,
        interval: float | None = None,
    ) -> None:
        """
        Block until a line containing pattern appears in the log file.

        Args:
            pattern: Non-empty substring signalling readiness
            timeout: Override of the handle's readiness timeout (seconds)
            interval: Override of the handle's poll interval (seconds)

        Raises:
            ReadinessTimeoutError: If the pattern is not seen in time; the
                child keeps running
            ReadinessIOError: If the log file cannot be opened or read
        """
        watcher = ReadinessWatcher(
            self._log_file,
            timeout=self.timeout if timeout is None else timeout,
            interval=self.interval if interval is None else interval,
            lg=self._lg,
            context={"cmd": self._command},
        )
        watcher.wait(pattern)

    def stop(self) -> None:
        """
        Kill the child (SIGKILL on POSIX) without waiting for it to be reaped.

        Stopping a child that already exited is a no-op, so repeated calls
        are safe.

        Raises:
            SignalError: If the kill request cannot be delivered
        """
        if self._child.poll() is not None:
            self._lg.debug(
                "process already exited",
                extra={
                    "cmd": self._command,
                    "pid": self._child.pid,
                    "returncode": self._child.returncode,
                },
            )
            return

        try:
            self._child.kill()
        except OSError as e:
            raise SignalError(
                "failed to kill process",
                cmd=self._command,
                pid=self._child.pid,
                error=e,
            ) from e

        self._lg.debug(
            "process killed", extra={"cmd": self._command, "pid": self._child.pid}
        )

    def wait(self, timeout: float | None = None) -> int:
        """
        Reap the child and return its exit code.

        Raises:
            WaitTimeoutError: If the child does not exit within timeout seconds
        """
        try:
            return self._child.wait(timeout=timeout)
        except subprocess.TimeoutExpired as e:
            raise WaitTimeoutError(
                "process did not exit in time",
                cmd=self._command,
                pid=self._child.pid,
                timeout=timeout,
            ) from e

    def close(self) -> None:
        """Kill the child if still running and reap it. Safe to call twice."""
        if self._finalizer.alive:
            self._finalizer()
            self._lg.debug(
                "process released",
                extra={"cmd": self._command, "returncode": self._child.returncode},
            )

    def __enter__(self) -> ProcessHandle:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(command={self._command!r}, "
            f"pid={self._child.pid}, log_file={str(self._log_file)!r})"
        )
