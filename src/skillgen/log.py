# -*- coding: utf-8 -*-
"""Logging setup shared by the CLI and library entry points."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(debug: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """Route ``skillgen`` log records through a rich handler on stderr.

    Args:
        debug: Log at DEBUG instead of WARNING
        console: Console to log to (default: a new stderr console)

    Returns:
        The configured ``skillgen`` package logger
    """
    level = logging.DEBUG if debug else logging.WARNING

    logger = logging.getLogger("skillgen")
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=debug,
        rich_tracebacks=debug,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    return logger
