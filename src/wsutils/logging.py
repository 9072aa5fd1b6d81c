"""Logging helpers; every server logger hangs off the ``ws`` base logger"""

from __future__ import annotations

import logging
from typing import TextIO

BASE_LOGGER = "ws"
LOG_FORMAT = "[%(asctime)s %(name)s %(levelname)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _to_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    value = getattr(logging, level.upper(), None)
    # Unknown names fall back to INFO
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str | int = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """
    Route the base logger to a single stream handler (stderr by default).

    Calling it again replaces the handler rather than adding a second one.
    """
    level = _to_level(level)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    base = logging.getLogger(BASE_LOGGER)
    base.handlers.clear()
    base.addHandler(handler)
    base.propagate = False
    set_logger_level(level)
    return base


def get_logger(child: str | None = None) -> logging.Logger:
    """Module logger under the base logger."""
    base = logging.getLogger(BASE_LOGGER)
    return base.getChild(child) if child else base


def get_connection_logger(addr: tuple[str, int]) -> logging.Logger:
    """Logger named after a peer address, e.g. ``ws.connection[127.0.0.1:50000]``."""
    return get_logger(f"connection[{addr[0]}:{addr[1]}]")


def set_logger_level(level: str | int, name: str = BASE_LOGGER) -> None:
    level = _to_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
