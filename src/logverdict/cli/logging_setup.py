"""Logging configuration for the CLI (Rich handler on stderr)."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING") -> None:
    """Route the ``logverdict`` loggers through a RichHandler on stderr."""
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger("logverdict")
    logger.handlers[:] = [handler]
    logger.setLevel(level.upper())
    logger.propagate = False
