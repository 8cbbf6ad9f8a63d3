from importlib.metadata import PackageNotFoundError, version

from .config import Config
from .dot_dict import DotDict
from .exceptions import (
    ConfigError,
    InfraError,
    InvalidCommandError,
    InvalidDurationError,
    InvalidLogLevelError,
    LoggingError,
    ProcessError,
    ReadinessIOError,
    ReadinessTimeoutError,
    SignalError,
    SpawnError,
    WaitTimeoutError,
)
from .subprocess import ProcessHandle, ReadinessWatcher, first_match

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("procinfra")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

__all__ = [
    "__version__",
    # Core classes
    "Config",
    "DotDict",
    "ProcessHandle",
    "ReadinessWatcher",
    "first_match",
    # Exceptions
    "InfraError",
    "ConfigError",
    "LoggingError",
    "InvalidLogLevelError",
    "InvalidDurationError",
    "ProcessError",
    "InvalidCommandError",
    "SpawnError",
    "ReadinessIOError",
    "ReadinessTimeoutError",
    "SignalError",
    "WaitTimeoutError",
]
