"""
Logging configuration module.
Sets up the loguru sinks used by the TikTok command-line runner.
"""

import sys
from typing import Optional

from loguru import logger

from shared.utils.env import get_env

LOG_LEVEL_ENV = "LOG_LEVEL"
LOG_LEVEL_DEFAULT = "INFO"

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def resolve_level(level: Optional[str] = None) -> str:
    """Return ``level``, else ``LOG_LEVEL`` from the environment, else INFO."""
    return (level or get_env(LOG_LEVEL_ENV) or LOG_LEVEL_DEFAULT).upper()


def setup_logging(
    level: Optional[str] = None,
    format: str = LOG_FORMAT,
    log_file: Optional[str] = None,
) -> None:
    """
    Replace loguru's sinks with stderr and an optional rotating file.

    Tracebacks are logged without variable values (``diagnose=False``)
    because request bodies carry the app secret and access tokens.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR); defaults to ``LOG_LEVEL``
        format: Log message format; color markup is stripped for the file sink
        log_file: Optional file path to write logs
    """
    level = resolve_level(level)
    logger.remove()

    logger.add(
        sys.stderr,
        format=format,
        level=level,
        colorize=True,
        diagnose=False,
    )

    if log_file:
        logger.add(
            log_file,
            format=format,
            level=level,
            colorize=False,
            diagnose=False,
            rotation="10 MB",
            retention="7 days",
        )
