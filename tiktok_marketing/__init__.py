"""
TikTok Marketing API client.
Lead form subscriptions, test leads and lead export for TikTok for Business.
"""

from dotenv import load_dotenv

# Load .env file if it exists (important for local development)
load_dotenv()

from tiktok_marketing.core.config import ClientConfig
from tiktok_marketing.core.exceptions import ConfigurationError, TikTokError, TransportError
from tiktok_marketing.domain.models import Advertiser, JsonValue, RequestOptions
from tiktok_marketing.api_client import TikTokAPIClient

__all__ = [
    "TikTokAPIClient",
    "ClientConfig",
    "Advertiser",
    "RequestOptions",
    "JsonValue",
    "TikTokError",
    "ConfigurationError",
    "TransportError",
]
