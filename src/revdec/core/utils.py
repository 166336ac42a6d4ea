"""Utility functions"""

import functools
import sys

from loguru import logger


def singleton(cls):
    """Singleton decorator to ensure a class has only one instance."""
    instances = {}

    @functools.wraps(cls, updated=())
    def get_instance(*args, **kwargs):
        if cls not in instances:
            instances[cls] = cls(*args, **kwargs)
        return instances[cls]

    return get_instance


def configure_logger(level: str = "WARNING", log_file=None):
    """Configure the logger for the application."""
    if hasattr(configure_logger, "configured"):
        return logger

    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format="<level>{level: <8}</level> | {message}",
    )
    if log_file:
        logger.add(
            str(log_file),
            rotation="10 MB",
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
        )

    configure_logger.configured = True
    return logger
