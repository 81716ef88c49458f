"""
Logging setup for lazybar applications and demos.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def setup_logging(level: str = "INFO", log_file: Optional[str | Path] = None) -> None:
    """
    Replace loguru's default handler with a console sink and an optional file sink.

    Args:
        level: Minimum level for the console sink
        log_file: Path of a rotating DEBUG log file
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )

    if log_file is not None:
        logger.add(
            str(log_file),
            rotation="1 day",
            retention="7 days",
            level="DEBUG",
            format="{time} | {level} | {name}:{function}:{line} | {message}",
        )
