from __future__ import annotations

import os
import sys
from typing import Optional

from loguru import logger


def setup_logging(log_level: str = "WARNING", log_file: Optional[str] = None):
    """Configure loguru for command-line use.

    ``LAYERED_CONFIG_LOG_LEVEL`` (or ``LOGURU_LEVEL``) overrides ``log_level``.
    """
    env_log_level = os.environ.get("LAYERED_CONFIG_LOG_LEVEL") or os.environ.get("LOGURU_LEVEL")
    if env_log_level:
        log_level = env_log_level.upper()

    logger.remove()

    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )
    logger.add(sys.stderr, level=log_level, format=console_format, colorize=True)

    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
            rotation="10 MB",
            retention="14 days",
            encoding="utf-8",
        )

    return logger
