"""Basic logging setup using loguru."""

import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure loguru: level, format, stderr handler and optional rotating file.

    stdout carries the MCP stdio protocol, so nothing is ever logged there.
    """
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())
    if log_file:
        logger.add(log_file, format=LOG_FORMAT, level=level.upper(), rotation="10 MB", retention=5, colorize=False)
