"""
Configuration loading for procinfra.

This module provides a Config class that extends DotDict to load YAML
configuration files (or in-memory dictionaries), apply environment variable
overrides and resolve ${variable} references.
"""

import copy
import os
import re
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError as PydanticValidationError

from ..dot_dict import DotDict
from ..exceptions import ConfigError
from .constants import DEFAULT_ENV_PREFIX, MAX_CONFIG_SIZE_BYTES
from .schemas import ProcessInfraConfig, validate_config

# Restricted to config-key characters to keep the pattern linear
_VAR_PATTERN = re.compile(r"\$\{([a-zA-Z0-9_.]+)\}")


def _check_file_size(fname_path: Path) -> None:
    """Refuse configuration files above the size limit."""
    file_size = os.path.getsize(fname_path)
    if file_size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigError(
            "configuration file exceeds maximum size",
            path=fname_path,
            size=file_size,
            max_size=MAX_CONFIG_SIZE_BYTES,
        )


def _load_yaml(fname_path: Path) -> dict[str, Any]:
    """Load a YAML mapping from disk."""
    try:
        with open(fname_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError("invalid YAML", path=fname_path, error=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            "configuration root must be a mapping",
            path=fname_path,
            type=type(data).__name__,
        )
    return data


class Config(DotDict):
    """
    Configuration loaded from a YAML file or a dictionary.

    Supports ${variable_name} references to other keys of the same document
    and environment variable overrides using the PROCINFRA_ prefix.

    Environment Variable Override Format:
        PROCINFRA_<SECTION>_<KEY>=value

    Examples:
        PROCINFRA_LOG_DIR=/var/log/myapp
        PROCINFRA_READINESS_TIMEOUT=60

    Example:
        config = Config("etc/procinfra.yaml")
        handle = ProcessHandle.start(config, ["etcd", "--data-dir", "/tmp/etcd"])
    """

    _RESERVED_KEYS = DotDict._RESERVED_KEYS | {
        "reload",
        "validate",
        "get_source_file",
        "get_env_overrides",
    }

    def __init__(
        self,
        fname: str | Path | None = None,
        data: dict[str, Any] | None = None,
        enable_env_overrides: bool = True,
        env_prefix: str = DEFAULT_ENV_PREFIX,
    ):
        """
        Initialize configuration.

        Args:
            fname: Path to the YAML configuration file
            data: In-memory configuration, used when fname is not given
            enable_env_overrides: Whether to apply environment variable overrides
            env_prefix: Prefix for environment variables (default: 'PROCINFRA_')

        Raises:
            ConfigError: If neither or both of fname and data are given, or
                the configuration cannot be loaded
        """
        super().__init__()
        if (fname is None) == (data is None):
            raise ConfigError("exactly one of fname or data must be given")

        self._enable_env_overrides = enable_env_overrides
        self._env_prefix = env_prefix
        self._config_path: Path | None = None

        if fname is not None:
            self._load(fname)
        else:
            self._apply(copy.deepcopy(data))

    def _load(self, fname: str | Path) -> None:
        """Load configuration from a YAML file."""
        fname_path = Path(fname).resolve()
        if not fname_path.is_file():
            raise ConfigError("configuration file not found", path=fname_path)

        _check_file_size(fname_path)
        self._config_path = fname_path
        self._apply(_load_yaml(fname_path))

    def _apply(self, config_data: dict[str, Any]) -> None:
        """Replace contents with config_data after overrides and substitution."""
        self.clear()
        if self._enable_env_overrides:
            config_data = self._apply_env_overrides(config_data)

        try:
            self.set(**config_data)
        except ValueError as e:
            raise ConfigError(str(e), path=self._config_path) from e
        self.set(**self._resolve(self.dict()))

    def reload(self) -> "Config":
        """
        Reload configuration from disk.

        Returns:
            Self for chaining.

        Raises:
            ConfigError: If Config was not loaded from a file.
        """
        if self._config_path is None:
            raise ConfigError("config was not loaded from a file")
        self._load(self._config_path)
        return self

    def get_source_file(self) -> Path | None:
        """Resolved path of the loaded file, None for in-memory configs."""
        return self._config_path

    def _resolve(self, content: Any) -> Any:
        """Recursively replace ${variable_name} references with their values."""
        if isinstance(content, dict):
            for k in list(content.keys()):
                content[k] = self._resolve(content[k])
        elif isinstance(content, list):
            return [self._resolve(item) for item in content]
        elif isinstance(content, str):
            return _VAR_PATTERN.sub(self._substitute_var, content)
        return content

    def _substitute_var(self, match: re.Match) -> str:
        var_name = match.group(1)
        if not self.has(var_name):
            raise ConfigError("undefined variable reference", variable=var_name)
        return str(self.get(var_name))

    def _apply_env_overrides(self, config_data: dict[str, Any]) -> dict[str, Any]:
        """Apply PROCINFRA_* environment variables on top of config_data."""
        for env_key, env_value in self._collect_env_vars().items():
            self._set_nested_value(
                config_data, self._env_key_to_path(env_key), env_value
            )
        return config_data

    def _collect_env_vars(self) -> dict[str, str]:
        return {k: v for k, v in os.environ.items() if k.startswith(self._env_prefix)}

    def _env_key_to_path(self, env_key: str) -> list[str]:
        """Convert 'PROCINFRA_LOG_DIR' to ['log', 'dir']."""
        return env_key[len(self._env_prefix) :].lower().split("_")

    def _set_nested_value(self, data: dict, path: list[str], value: str) -> None:
        current = data
        for part in path[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[path[-1]] = self._convert_env_value(value)

    def _convert_env_value(
        self, value: str
    ) -> bool | int | float | str | list[Any] | None:
        """Convert an environment variable string to the matching YAML type."""
        if value.lower() in ("null", "none", ""):
            return None

        if value.lower() in ("true", "false"):
            return value.lower() == "true"

        if "," in value:
            return [self._convert_env_value(v.strip()) for v in value.split(",")]

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value

    def get_env_overrides(self) -> dict[str, Any]:
        """
        Get all environment variable overrides that would be applied.

        Returns:
            Mapping of dot-separated config path to converted value
        """
        if not self._enable_env_overrides:
            return {}

        return {
            ".".join(self._env_key_to_path(k)): self._convert_env_value(v)
            for k, v in self._collect_env_vars().items()
        }

    def validate(self) -> ProcessInfraConfig:
        """
        Validate configuration against the pydantic schema.

        Returns:
            The validated schema object

        Raises:
            ConfigError: If the configuration is invalid
        """
        try:
            return validate_config(self.dict())
        except PydanticValidationError as e:
            raise ConfigError(
                "invalid configuration", path=self._config_path, errors=e.error_count()
            ) from e
