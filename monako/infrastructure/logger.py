"""
Package logger for monako.
"""

import logging
import sys


LOGGER_NAME = "monako"

DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s %(message)s"
TRACE_FORMAT = "%(asctime)s %(levelname)-7s [%(filename)s:%(lineno)d] %(message)s"

logger = logging.getLogger(LOGGER_NAME)


def configure_logging(trace: bool = False, stream=None) -> logging.Logger:
    """
    Install a single stream handler on the package logger.

    Trace mode lowers the level to DEBUG and adds the calling file and
    line number to every record.
    """

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(TRACE_FORMAT if trace else DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if trace else logging.INFO)
    logger.propagate = False

    return logger
