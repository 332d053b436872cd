"""Root logger setup for the user directory runtime.

``USERDIR_LOG_LEVEL`` (name or number) wins over everything; otherwise the
``debug`` flag from settings chooses between DEBUG and INFO.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "USERDIR_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def env_log_level() -> Optional[int]:
    """Level forced through ``USERDIR_LOG_LEVEL``; unknown names fall back to INFO."""
    raw = (os.getenv(LOG_LEVEL_ENV) or "").strip()
    if not raw:
        return None
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_root(debug: bool = False) -> int:
    """Install the compact handler once and set the root level; returns the level."""
    level = env_log_level()
    if level is None:
        level = logging.DEBUG if debug else logging.INFO
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(level)
    return level


__all__ = ["configure_root", "env_log_level"]
