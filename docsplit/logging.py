"""Logging setup for docsplit runs."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "docsplit"
_CONSOLE_FORMAT = "[docsplit] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``docsplit`` hierarchy, e.g. ``docsplit.emitter``."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def console_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a level; ``verbose`` wins over ``quiet``."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route docsplit log records to the console and, optionally, a log file.

    The log file always records at DEBUG so a quiet console run still leaves
    a full trace of which files were written.
    """
    level = console_level(verbose=verbose, quiet=quiet)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_handler(logging.StreamHandler(), level, _CONSOLE_FORMAT))
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        logger.addHandler(_handler(file_handler, logging.DEBUG, _FILE_FORMAT))

    logger.setLevel(min(handler.level for handler in logger.handlers))
    return logger


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


__all__ = ["configure_logging", "console_level", "get_logger"]
