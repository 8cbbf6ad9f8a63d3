"""Configuration constants."""

# Maximum configuration file size (10 MB)
MAX_CONFIG_SIZE_BYTES = 10 * 1024 * 1024

# Prefix for environment variable overrides (PROCINFRA_LOG_DIR -> log.dir)
DEFAULT_ENV_PREFIX = "PROCINFRA_"

# Readiness defaults used when configuration does not set them
DEFAULT_READINESS_TIMEOUT = 30.0
DEFAULT_POLL_INTERVAL = 2.0
