"""
TEMPLATER Logging Utilities

Simple logging setup using Python's standard logging library.
Library modules only call ``logging.getLogger(__name__)``; the CLI calls
``setup_logging`` to route records through click so they are coloured and
written to stderr.

Usage:
    from templater.logging import get_logger

    logger = get_logger(__name__)
    logger.warning("Template has no types file")
"""

import logging
from typing import Optional

import click

ROOT_LOGGER_NAME = "templater"

DEFAULT_FORMAT = '[%(levelname)s] %(message)s'
DEBUG_FORMAT = '[%(levelname)s] %(name)s - %(message)s'

LEVEL_COLORS = {
    logging.DEBUG: 'bright_black',
    logging.INFO: 'cyan',
    logging.WARNING: 'yellow',
    logging.ERROR: 'red',
    logging.CRITICAL: 'red',
}


class ClickEchoHandler(logging.Handler):
    """
    Logging handler that writes records with ``click.secho``.

    The output stream is resolved on every record, so the handler keeps
    working when click swaps stderr (e.g. under CliRunner).
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            click.secho(message, err=True, fg=LEVEL_COLORS.get(record.levelno))
        except Exception:
            self.handleError(record)


def get_logger(name: str = ROOT_LOGGER_NAME, level: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__ or module name)
        level: Optional log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        logging.Logger instance
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(getattr(logging, level.upper()))
    return logger


def setup_logging(level: str = "WARNING", format_string: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``templater`` logger for command line use.

    Replaces any ClickEchoHandler installed by a previous call, so calling
    it once per command invocation is safe.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom log format

    Returns:
        The configured ``templater`` logger
    """
    numeric_level = getattr(logging, level.upper())
    if format_string is None:
        format_string = DEBUG_FORMAT if numeric_level <= logging.DEBUG else DEFAULT_FORMAT

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, ClickEchoHandler):
            logger.removeHandler(handler)

    handler = ClickEchoHandler()
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)
    logger.setLevel(numeric_level)

    return logger


__all__ = [
    'ClickEchoHandler',
    'get_logger',
    'setup_logging',
    'ROOT_LOGGER_NAME',
    'LEVEL_COLORS',
]
