"""Logging setup for tarutil.

Library modules log through ``tarutil.*`` loggers and leave handler setup to
the application. The CLI calls `configure_logging` once before dispatching.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "TARUTIL_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV) or "INFO"
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    # getLevelName returns "Level X" for unknown names
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Install a stderr handler on the root logger.

    `level` wins over `TARUTIL_LOG_LEVEL`; unknown names fall back to INFO.
    """
    logging.basicConfig(
        level=_resolve_level(level),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "tarutil")


__all__ = ["configure_logging", "get_logger"]
