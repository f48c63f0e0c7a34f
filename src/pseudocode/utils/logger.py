"""Minimal logging utilities for pseudocode.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from pseudocode.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Rendering algorithm")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "pseudocode." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'pseudocode.mymodule'
    """
    if not (name == "pseudocode" or name.startswith("pseudocode.")):
        name = f"pseudocode.{name}"
    return logging.getLogger(name)
