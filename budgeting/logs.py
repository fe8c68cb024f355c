"""Logging setup for the command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "budgeting"


def configure_logging(level: str | int = logging.WARNING, console: Console | None = None) -> logging.Logger:
    """Send budgeting log records to stderr through rich.

    Calling it again only changes the level; handlers are installed once.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or number.
        console: Console to write to. Defaults to a stderr console.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
