"""
Logging setup for Quill.

Library modules log through ``logging.getLogger(__name__)`` and never attach
handlers themselves; entry points call :func:`configure_logging`.
"""

import logging
import sys
from typing import Optional, TextIO, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Handler installed by configure_logging, if any
_handler: Optional[logging.Handler] = None


def verbosity_to_level(verbosity: int) -> int:
    """Map a count of -v flags to a logging level."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(level: Union[int, str] = logging.WARNING,
                      stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attach a stderr handler to the ``quill`` logger.

    Calling it again replaces the handler instead of stacking a new one.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    global _handler
    logger = logging.getLogger("quill")
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(level)
    return logger
