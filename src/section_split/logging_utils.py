from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("section_split")
    logger.setLevel(_level_from_string(level))
    logger.handlers = []
    logger.propagate = False

    handler = RichHandler(
        console=Console(stderr=True), rich_tracebacks=True, show_time=False, show_level=True
    )
    handler.setLevel(_level_from_string(level))
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
