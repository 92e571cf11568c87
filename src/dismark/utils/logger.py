"""Logger factory for dismark modules.

All loggers live under the ``dismark`` namespace, so applications can tune
the whole library with one ``logging.getLogger("dismark")`` call. dismark
never configures handlers itself.

Example:
    >>> from dismark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Built rule table")
"""

from __future__ import annotations

import logging

_ROOT = "dismark"


def get_logger(name: str) -> logging.Logger:
    """Return the standard library logger for ``name`` under ``dismark.``.

    Args:
        name: Module name, usually ``__name__``; prefixed unless it already
            belongs to the dismark namespace

    Example:
        >>> get_logger("rules").name
        'dismark.rules'
        >>> get_logger("dismark.parser").name
        'dismark.parser'
    """
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
