"""Configuration management for the TikTok marketing client.

Credentials resolve with a fixed precedence:
explicit arguments > YAML file > environment variables > defaults

The configuration is an immutable dataclass so one client can be shared
between call sites without any of them changing its credentials.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from loguru import logger

from shared.utils.env import get_env, get_env_bool, parse_bool
from tiktok_marketing.core.constants import (
    ENV_APP_ID,
    ENV_SECRET,
    ENV_TIMEOUT,
    ENV_VERIFY_SSL,
)
from tiktok_marketing.core.exceptions import ConfigurationError

CONFIG_SECTION = "tiktok"


def _coerce_timeout(value: Any, source: str) -> Optional[float]:
    """Turn a configured timeout into seconds, or None for the transport default."""
    if value is None or value == "":
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Invalid timeout value: {value!r}",
            details={"source": source},
        )
    if timeout <= 0:
        raise ConfigurationError(
            f"Timeout must be positive, got {timeout}",
            details={"source": source},
        )
    return timeout


def coerce_bool(value: Any, source: str, default: bool = False) -> bool:
    """Interpret a configured flag strictly; None keeps ``default``.

    Raises:
        ConfigurationError: If the value is not a recognizable boolean
    """
    if value is None:
        return default
    parsed = parse_bool(value)
    if parsed is None:
        raise ConfigurationError(
            f"Invalid boolean value: {value!r}",
            details={"source": source},
        )
    return parsed


@dataclass(frozen=True)
class ClientConfig:
    """Application credentials and transport options.

    Attributes:
        app_id: TikTok for Business application id
        secret: Application secret
        timeout: Request timeout in seconds (None = no timeout)
        verify_ssl: Default TLS certificate verification
    """

    app_id: str = ""
    secret: str = field(default="", repr=False)
    timeout: Optional[float] = None
    verify_ssl: bool = True

    @property
    def has_credentials(self) -> bool:
        """Whether both app id and secret are set."""
        return bool(self.app_id) and bool(self.secret)

    @classmethod
    def resolve(
        cls,
        app_id: Optional[str] = None,
        secret: Optional[str] = None,
        timeout: Optional[float] = None,
        verify_ssl: Optional[bool] = None,
    ) -> "ClientConfig":
        """Build configuration from explicit values, falling back to the environment.

        A value that is None or empty is read from ``TIKTOK_APP_ID``,
        ``TIKTOK_SECRET``, ``TIKTOK_TIMEOUT`` or ``TIKTOK_VERIFY_SSL``.

        Returns:
            ClientConfig instance

        Raises:
            ConfigurationError: If the timeout is not a positive number
        """
        resolved_app_id = app_id or get_env(ENV_APP_ID, "")
        resolved_secret = secret or get_env(ENV_SECRET, "")

        if timeout is None:
            resolved_timeout = _coerce_timeout(get_env(ENV_TIMEOUT), ENV_TIMEOUT)
        else:
            resolved_timeout = _coerce_timeout(timeout, "argument")

        if verify_ssl is None:
            verify_ssl = get_env_bool(ENV_VERIFY_SSL, True)

        config = cls(
            app_id=resolved_app_id,
            secret=resolved_secret,
            timeout=resolved_timeout,
            verify_ssl=verify_ssl,
        )

        if not config.has_credentials:
            logger.warning(
                f"TikTok credentials incomplete: set {ENV_APP_ID} and {ENV_SECRET} "
                f"or pass app_id/secret explicitly"
            )

        return config

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create configuration from environment variables only."""
        return cls.resolve()

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ClientConfig":
        """Load configuration from a YAML credentials file.

        The file holds a ``tiktok`` section::

            tiktok:
              app_id: "7000000000000000001"
              secret: "..."
              timeout: 30
              verify_ssl: true

        Keys missing from the file fall back to the environment.

        Args:
            path: Path to the YAML file

        Returns:
            ClientConfig instance

        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                details={"path": str(config_path)},
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {config_path}",
                details={"error": str(e)},
            )

        section = content.get(CONFIG_SECTION) if isinstance(content, dict) else None
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"Configuration file must contain a '{CONFIG_SECTION}' mapping",
                details={"path": str(config_path)},
            )

        logger.debug(f"Loaded TikTok configuration from {config_path}")

        verify_ssl = section.get("verify_ssl")
        return cls.resolve(
            app_id=section.get("app_id"),
            secret=section.get("secret"),
            timeout=section.get("timeout"),
            verify_ssl=None if verify_ssl is None else coerce_bool(verify_ssl, "verify_ssl"),
        )
