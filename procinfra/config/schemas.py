"""
Configuration schemas using Pydantic for validation.

Describes the document consumed by ProcessHandle.start():

    log:
      dir: /tmp/t
      level: debug
    readiness:
      timeout: 30
      interval: 2
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_POLL_INTERVAL, DEFAULT_READINESS_TIMEOUT

VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "FALSE")


class LogSectionConfig(BaseModel):
    """Configuration for process log files and the package logger."""

    dir: str = Field(..., min_length=1, description="Directory receiving <exe>.log files")
    level: str = Field(default="info", description="Log level for procinfra loggers")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: Any) -> Any:
        """Validate log level is a recognized level."""
        if isinstance(v, str) and v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        return v

    model_config = ConfigDict(extra="allow")


class ReadinessConfig(BaseModel):
    """Readiness polling settings."""

    timeout: float = Field(
        default=DEFAULT_READINESS_TIMEOUT,
        gt=0,
        description="Seconds to wait for the readiness pattern",
    )
    interval: float = Field(
        default=DEFAULT_POLL_INTERVAL,
        gt=0,
        description="Seconds to sleep between unsuccessful scans",
    )


class ProcessInfraConfig(BaseModel):
    """Root configuration schema."""

    log: LogSectionConfig
    readiness: ReadinessConfig = Field(default_factory=ReadinessConfig)

    model_config = ConfigDict(extra="allow")


def validate_config(config_dict: dict[str, Any]) -> ProcessInfraConfig:
    """
    Validate a configuration dictionary against the schema.

    Raises:
        pydantic.ValidationError: If the configuration is invalid
    """
    return ProcessInfraConfig.model_validate(config_dict)
