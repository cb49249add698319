"""Logging setup for finlite.

Modules log through ``logging.getLogger(__name__)``; the CLI routes those
records to stderr through rich.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING") -> None:
    """Configure the ``finlite`` logger once.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ...).
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    logger = logging.getLogger("finlite")
    logger.setLevel(numeric)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
