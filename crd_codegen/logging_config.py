"""Logging setup shared by the library and the command line."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "crd_codegen"


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the package logger hierarchy."""
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logging(
    level: int = logging.WARNING, console: Optional[Console] = None
) -> logging.Logger:
    """Attach a rich handler to the package logger.

    Calling this more than once replaces the previously installed handler.

    Args:
        level: Minimum level that reaches the console.
        console: Console to write to (defaults to stderr).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
