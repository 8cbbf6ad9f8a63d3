"""
Configuration management package.

This module provides:
- Config class for loading YAML configuration files
- Pydantic schemas validating the process/logging/readiness sections
"""

from .config import Config
from .constants import (
    DEFAULT_ENV_PREFIX,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_READINESS_TIMEOUT,
    MAX_CONFIG_SIZE_BYTES,
)
from .schemas import (
    LogSectionConfig,
    ProcessInfraConfig,
    ReadinessConfig,
    validate_config,
)

__all__ = [
    "Config",
    # Constants
    "DEFAULT_ENV_PREFIX",
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_READINESS_TIMEOUT",
    "MAX_CONFIG_SIZE_BYTES",
    # Validation
    "LogSectionConfig",
    "ProcessInfraConfig",
    "ReadinessConfig",
    "validate_config",
]
