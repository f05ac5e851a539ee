"""Core abstractions, configuration and errors for the TikTok client."""

from tiktok_marketing.core.protocols import (
    AdvertiserLike,
    HTTPResponse,
    HTTPSession,
)
from tiktok_marketing.core.exceptions import (
    TikTokError,
    ConfigurationError,
    TransportError,
)
from tiktok_marketing.core.config import ClientConfig

__all__ = [
    # Protocols
    "AdvertiserLike",
    "HTTPResponse",
    "HTTPSession",
    # Exceptions
    "TikTokError",
    "ConfigurationError",
    "TransportError",
    # Configuration
    "ClientConfig",
]
