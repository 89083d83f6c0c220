"""
Package-wide defaults, overridable through environment variables.
"""

import logging
import os
from typing import Optional

# One hour expressed in ACT/365 years.
DEFAULT_TIME_TICK_SIZE = float(
    os.getenv("GRIDLIB_TIME_TICK_SIZE", str(1.0 / (365.0 * 24.0)))
)

LOG_LEVEL = os.getenv("GRIDLIB_LOG_LEVEL")


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Apply a log level to the ``gridlib`` logger.

    Args:
        level: Level name such as "DEBUG"; falls back to GRIDLIB_LOG_LEVEL

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("gridlib")
    level = level or LOG_LEVEL
    if level:
        logger.setLevel(level.upper())
    return logger
