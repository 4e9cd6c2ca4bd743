"""
Logging setup for scripts and the viewer.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached here, to the ``coriolis`` package logger, by whoever runs the show.
"""
import logging
import sys
from typing import List, Optional

LOGGER_NAME = "coriolis"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _detach_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _make_handlers(level: int, log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route the package's log records to stdout and, optionally, a file.

    Calling it again replaces (and closes) the handlers from the previous
    call, so an earlier log file is released before a new one is opened.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path; the file is truncated on open.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    _detach_handlers(logger)

    for handler in _make_handlers(level, log_file):
        logger.addHandler(handler)

    logger.debug("Logging initialized (level=%s, file=%s)", logging.getLevelName(level), log_file)
    return logger
