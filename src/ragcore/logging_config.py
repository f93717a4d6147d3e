"""
Logging setup for applications embedding ragcore.

Library modules only create module loggers; nothing is configured on
import. Call `setup_logging()` once from the application entry point.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from ragcore.config import settings

LOGGER_NAME = "ragcore"


def setup_logging(level: str | None = None, console: Console | None = None) -> logging.Logger:
    """
    Attach a rich console handler to the package logger.

    Calling this more than once replaces the previous handler rather than
    stacking duplicates.

    Args:
        level: Logging level name (default from settings.log_level)
        console: Optional rich Console to write to (default stderr)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level or settings.log_level)

    # Drop handlers installed by a previous call
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
