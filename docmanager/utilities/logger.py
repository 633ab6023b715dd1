"""
Package logger for docmanager.

Every module logs through `logger`, named 'docmanager'. Query, aggregation and flush timings go to DEBUG.
Request values that were replaced by a default go to WARNING.
"""

import logging

logger: logging.Logger = logging.getLogger('docmanager')
logger.setLevel(logging.WARNING)
logger.addHandler(logging.NullHandler())

def set_log_level(level: int | str) -> None:
    """Set the logging level for the package, e.g. logging.DEBUG or "DEBUG" to see every query."""
    logger.setLevel(level)

def add_log_handler(handler: logging.Handler) -> None:
    """Attach a handler to the package logger, for applications that don't configure the root logger."""
    logger.addHandler(handler)
