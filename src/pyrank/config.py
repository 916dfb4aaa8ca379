"""
Centralized configuration for pyrank.
"""

from __future__ import annotations

import logging
import os
from typing import Optional


class Config:
    # Returned by rank queries when no record qualifies. Legal times may be
    # negative, so the sentinel cannot be an int.
    not_found = None
    # Added to the current maximum quality to hide extracted records.
    sentinel_step = 1
    log_level = "WARNING"
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_env_var = "PYRANK_LOG_LEVEL"


NOT_FOUND = Config.not_found


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for applications embedding pyrank.

    Args:
        level: Level name; falls back to the PYRANK_LOG_LEVEL environment
            variable, then to Config.log_level
    """
    if level is None:
        level = os.getenv(Config.log_env_var, Config.log_level)
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=Config.log_format,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
