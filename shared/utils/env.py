"""
Environment variable utilities.
Typed accessors used by the client configuration layer.
"""

import os
from typing import Any, Optional

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get environment variable with optional default.

    Empty strings count as unset, so an exported but blank
    TIKTOK_APP_ID falls back to the default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    value = os.environ.get(key)
    if value is None or value == "":
        return default
    return value


def parse_bool(value: Any) -> Optional[bool]:
    """
    Interpret a bool, 0/1 or a "true"/"false"-style string.

    Args:
        value: Value read from the environment, a YAML file or a payload

    Returns:
        Boolean value, or None when the value is not recognized
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    return None


def get_env_bool(key: str, default: bool = False) -> bool:
    """
    Get environment variable as boolean.

    Args:
        key: Environment variable name
        default: Default value if not set or not recognized

    Returns:
        Boolean value
    """
    value = parse_bool(os.environ.get(key, ""))
    return default if value is None else value
