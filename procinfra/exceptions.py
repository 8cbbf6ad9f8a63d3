"""
Unified exception hierarchy for procinfra.

Every error raised by the package derives from InfraError, so callers can
catch all of them with a single except clause while still telling apart
"the process never became ready" from "something is broken".
"""

from typing import Any


class InfraError(Exception):
    """
    Base exception for all procinfra errors.

    Example:
        try:
            handle.wait_ready("listening on port")
        except InfraError as e:
            lg.error(f"process failed: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(InfraError):
    """
    Configuration-related errors.

    Examples:
        - Config file not found or too large
        - Invalid YAML syntax
        - Unresolvable ${variable} reference
        - Schema validation failed
    """

    pass


class LoggingError(InfraError):
    """Logging-related errors."""

    pass


class InvalidLogLevelError(LoggingError):
    """Raised when an invalid log level is specified."""

    def __init__(self, level: Any) -> None:
        self.level = level
        super().__init__(f"Invalid log level: {level}")


class InvalidDurationError(InfraError, ValueError):
    """Raised when an invalid duration value is provided."""

    pass


class ProcessError(InfraError):
    """
    Base exception for child process lifecycle errors.

    The context always carries enough to diagnose the failure without
    inspecting internals: the command, and where relevant the pattern,
    the log file or the underlying OS error.
    """

    pass


class InvalidCommandError(ProcessError):
    """Raised when an empty command is given to start a process."""

    pass


class SpawnError(ProcessError):
    """
    Raised when a process cannot be started.

    Examples:
        - Executable not found
        - Permission denied
        - Log file could not be created
    """

    pass


class ReadinessIOError(ProcessError):
    """Raised when the log file cannot be opened or read while polling."""

    pass


class ReadinessTimeoutError(ProcessError):
    """Raised when the readiness pattern is not seen before the deadline."""

    pass


class SignalError(ProcessError):
    """Raised when the kill request cannot be delivered to the process."""

    pass


class WaitTimeoutError(ProcessError):
    """Raised when a process does not exit within the wait timeout."""

    pass
