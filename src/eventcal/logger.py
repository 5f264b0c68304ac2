"""Logging setup for eventcal."""

from __future__ import annotations

import logging
import os
import sys

from .events.constants import LOG_LEVEL_ENV

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logger(name: str = "eventcal", level: int | None = None) -> logging.Logger:
    """
    Configure and return the package logger.

    The level defaults to ``$EVENTCAL_LOG_LEVEL`` or WARNING. Calling this
    again only adjusts the level; handlers are attached once.
    """
    if level is None:
        level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
