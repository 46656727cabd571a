"""Minimal logging utilities for texmark.

Library modules log through the standard library; only the CLI installs
handlers.

Example:
    >>> from texmark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Extracted %d spans", 3)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``texmark.``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("scanner").name
        'texmark.scanner'
    """
    if not (name == "texmark" or name.startswith("texmark.")):
        name = f"texmark.{name}"
    return logging.getLogger(name)
