"""Utility functions module."""

from shared.utils.logging import LOG_FORMAT, setup_logging
from shared.utils.env import get_env, get_env_bool, parse_bool

__all__ = [
    "LOG_FORMAT",
    "setup_logging",
    "get_env",
    "get_env_bool",
    "parse_bool",
]
