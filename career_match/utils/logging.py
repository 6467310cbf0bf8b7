"""Logging configuration for career-match.

The CLI prints its results as JSON on stdout, so every diagnostic goes
through the single `career_match` logger and its console handler, which
writes to stderr unless another stream is given.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "career_match"
HANDLER_NAME = "career_match.console"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: str | None) -> int:
    if level is None:
        return logging.INFO
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def _console_handler(logger: logging.Logger) -> logging.Handler | None:
    for handler in logger.handlers:
        if handler.get_name() == HANDLER_NAME:
            return handler
    return None


def configure_logging(
    level: str | None = None,
    stream: TextIO | None = None,
    format_string: str = LOG_FORMAT,
    date_format: str = DATE_FORMAT,
) -> logging.Logger:
    """Configure and return the application logger.

    Calling this again adjusts the level and format of the existing console
    handler. A new handler is only created when `stream` changes.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Unknown or missing names fall back to INFO.
        stream: Destination for log records (defaults to sys.stderr).
        format_string: Format string for log messages.
        date_format: Format string for timestamps.
    """
    logger = logging.getLogger(LOGGER_NAME)
    log_level = _resolve_level(level)
    target = stream if stream is not None else sys.stderr

    handler = _console_handler(logger)
    if handler is not None and getattr(handler, "stream", None) is not target:
        logger.removeHandler(handler)
        handler = None

    if handler is None:
        handler = logging.StreamHandler(target)
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)

    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(format_string, datefmt=date_format))
    logger.setLevel(log_level)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the application logger.

    Accepts either a short name ("matching.scorer") or a module's
    `__name__` that already starts with 'career_match'.
    """
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Drop all handlers and restore default propagation (for tests)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
