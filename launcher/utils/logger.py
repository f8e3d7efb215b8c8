"""Process-wide log setup for the launcher.

The first `get_logger` call configures the root logger at
`LAUNCHER_LOG_LEVEL`, unless the host application has already installed
handlers of its own.
"""
import logging
from typing import Optional

from launcher.config import get_settings


def setup_logging(level: Optional[str] = None) -> None:
    level = (level or get_settings().log_level or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
