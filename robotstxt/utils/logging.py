from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


ROOT_LOGGER = "robotstxt"

# silent unless an application calls setup_logger()
logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def setup_logger(level: str = "INFO") -> logging.Logger:
    """Send ``robotstxt.*`` records to stderr through rich. Safe to call twice."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    console = Console(stderr=True, highlight=False)
    handler = RichHandler(console=console, show_time=False, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or ROOT_LOGGER)
