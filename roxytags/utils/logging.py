"""Logging setup for roxytags.

Every module logs through a child of the ``roxytags`` logger. When the
tags run inside a documentation build the host decides where records
go; the CLI calls :func:`setup_logging` to send them to stderr, and
optionally a file, with the level and format from config.yaml.
"""

import logging
import sys
from typing import Optional, TextIO, Union

LOGGER_NAME = "roxytags"
DEFAULT_FORMAT = "%(levelname)s [%(name)s] %(message)s"


def resolve_level(level: Union[str, int]) -> int:
    """Turn a level name or number into a logging level number.

    Unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    value = getattr(logging, level.strip().upper(), None)
    return value if isinstance(value, int) else logging.INFO


def _attach(
    logger: logging.Logger,
    handler: logging.Handler,
    level: int,
    formatter: logging.Formatter,
) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def setup_logging(
    level: Union[str, int] = "INFO",
    log_format: str = DEFAULT_FORMAT,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the package logger for command-line use.

    Existing handlers are replaced, so calling this again reconfigures
    the logger instead of duplicating output. Records still propagate,
    which lets an embedding application or pytest capture them.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number.
        log_format: Format string for log messages.
        log_file: Optional file to log to in addition to the console.
        stream: Console stream; stderr if not given, keeping stdout free
            for generated Rd and URLs.

    Returns:
        The configured ``roxytags`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    numeric_level = resolve_level(level)
    logger.setLevel(numeric_level)
    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    _attach(logger, console_handler, numeric_level, formatter)
    if log_file:
        _attach(logger, logging.FileHandler(log_file), numeric_level, formatter)

    logger.debug(
        "Logging initialized at level %s", logging.getLevelName(numeric_level)
    )
    return logger
