"""
Constants for the logging system.

Format strings, rule widths and the custom TRACE level definition.
"""

import logging


class LogConstants:
    """Constants for the logging system."""

    DEFAULT_FORMAT: str = "[%(asctime)s] [%(levelname).1s] %(message)s"
    MICROS_DATEFMT: str = "%H:%M:%S"

    # Messages are padded to this width before extra fields are appended
    DEFAULT_RULE_WIDTH: int = 70

    CUSTOM_LEVELS: dict[str, int] = {"TRACE": 5}

    LEVEL_NAMES: dict[str, int | bool] = {
        "trace": 5,
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
        "false": False,  # Special value to disable all logging
    }

    # Record attribute carrying the merged extra fields
    EXTRA_ATTR: str = "__procinfra__extra"
