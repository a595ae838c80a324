"""Minimal logging utilities for Pincel.

Provides a simple get_logger function that wraps the standard library logging.
Pincel never installs handlers; applications configure logging themselves.

Example:
    >>> from pincel.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Highlighting block")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "pincel." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("grammars")
        >>> logger.name
        'pincel.grammars'
    """
    if not (name == "pincel" or name.startswith("pincel.")):
        name = f"pincel.{name}"
    return logging.getLogger(name)
