"""Logging helper for Pestañas.

Example:
    >>> from pestanas.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("opened tabbed block")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a standard library logger namespaced under ``pestanas``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("cli").name
        'pestanas.cli'
    """
    if not (name == "pestanas" or name.startswith("pestanas.")):
        name = f"pestanas.{name}"
    return logging.getLogger(name)
