"""Minimal logging utilities for casillas.

Example:
    >>> from casillas.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "casillas." prefix.

    Example:
        >>> get_logger("mymodule").name
        'casillas.mymodule'
    """
    if not (name == "casillas" or name.startswith("casillas.")):
        name = f"casillas.{name}"
    return logging.getLogger(name)
