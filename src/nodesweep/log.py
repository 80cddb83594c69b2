"""Logging setup for nodesweep."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "nodesweep"


def setup_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """
    Route package logs through a RichHandler.

    Args:
        verbose: Log each processed path (INFO) instead of warnings only
        console: Console to render on, shared with progress bars

    Returns:
        The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(handler)
    logger.propagate = False
    logger.setLevel(logging.INFO if verbose else logging.WARNING)
    return logger
