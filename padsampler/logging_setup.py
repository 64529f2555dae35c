"""Logging configuration helpers for padsampler."""

from __future__ import annotations

import logging
import os
import sys


def configure_logging(default_level: str = "WARNING") -> int:
    """Configure process-wide logging and return the resolved level.

    The level is read from ``LOG_LEVEL``; ``default_level`` applies when it is
    unset. An unrecognised name falls back to ``default_level`` and is
    reported once the handler is installed.
    """
    level_name = os.environ.get("LOG_LEVEL", default_level).upper()
    level = logging.getLevelName(level_name)
    invalid_level = None
    if not isinstance(level, int):
        invalid_level = level_name
        level = getattr(logging, default_level.upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))

    if invalid_level is not None:
        logging.getLogger(__name__).warning(
            "Invalid LOG_LEVEL '%s'; using %s", invalid_level, logging.getLevelName(level)
        )

    return level
