"""
Logging setup for the chartsense package.
"""

import logging
import sys
from typing import Optional

from chartsense.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger with a single console handler.

    Args:
        level: Logging level name, defaults to the configured log_level

    Returns:
        The configured "chartsense" logger
    """
    logger = logging.getLogger("chartsense")

    level_name = (level or get_settings().log_level).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    # Calling twice must not duplicate output
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
