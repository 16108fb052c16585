"""Lightweight logging setup for the CLI."""

import logging
import os
import sys
from typing import Optional

from zkdrop.core.config import LOG_LEVEL_ENV


def _env_level() -> Optional[int]:
    name = os.environ.get(LOG_LEVEL_ENV)
    if not name:
        return None
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else None


def configure_logging(level: Optional[int] = None, default: int = logging.WARNING) -> None:
    # An explicit level (e.g. from --verbose) wins; ZKDROP_LOG_LEVEL only replaces the default.
    if level is None:
        level = _env_level()
    if level is None:
        level = default
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
