"""Logging configuration for scripts embedding the scorer."""

from __future__ import annotations

import logging
from typing import Optional

from .config import get_settings


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger; the level defaults to ``BCS_LOG_LEVEL``."""

    level_name = (level or get_settings().bcs_log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
