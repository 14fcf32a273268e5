"""Minimal logging utilities for orgrender.

Provides a get_logger function that wraps the standard library logging.
Loggers are handed to the output buffer and renderers at construction; no
module reads verbosity from the environment.

Example:
    >>> import logging
    >>> from orgrender.utils.logger import get_logger
    >>> logger = get_logger("buffer", level=logging.DEBUG)
    >>> logger.name
    'orgrender.buffer'
"""

from __future__ import annotations

import logging


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "orgrender." prefix.

    Args:
        name: Logger name (typically __name__)
        level: Optional level to set on the logger

    Returns:
        logging.Logger instance
    """
    if not (name == "orgrender" or name.startswith("orgrender.")):
        name = f"orgrender.{name}"
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
