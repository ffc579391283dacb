# logging_config.py
"""Logging configuration for the path tracer."""

import logging
import sys
from typing import Optional

from pathtracer.config import LOG_FORMAT, LOG_LEVEL


def setup_logging(level: Optional[str] = None, name: str = "pathtracer") -> logging.Logger:
    """
    Set up logging for the command-line tool.

    Logs go to stderr because stdout may carry the rendered image.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        name: Logger name

    Returns:
        Configured logger instance
    """
    if level is None:
        level = LOG_LEVEL

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Calling again replaces the handler rather than stacking a second one.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)

    return logger
