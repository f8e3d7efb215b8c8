"""Controller-side logging.

Session events (mode switches, failed opens) go to the `launcher.gui` logger
so a host shell can filter them apart from backend chatter.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("launcher.gui")


def log(message: str, level: int = logging.INFO) -> None:
    logger.log(level, message)
