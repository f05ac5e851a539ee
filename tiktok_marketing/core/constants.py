"""Constants and enumerations for the TikTok marketing client.

This module centralizes the API hosts, fixed request values and
environment variable names used across the package.
"""

from enum import Enum
from typing import Final, FrozenSet


# API hosts
API_VERSION: Final[str] = "v1.2"
BASE_URL: Final[str] = f"https://ads.tiktok.com/open_api/{API_VERSION}"
SANDBOX_URL: Final[str] = f"https://sandbox-ads.tiktok.com/open_api/{API_VERSION}"

# Request headers
CONTENT_TYPE_JSON: Final[str] = "application/json"
ACCESS_TOKEN_HEADER: Final[str] = "Access-Token"

# Payload keys accepted for backward compatibility; consumed, never sent
LEGACY_SANDBOX_KEY: Final[str] = "sandbox"
LEGACY_VERIFY_SSL_KEY: Final[str] = "verifyssl"

# Fixed request values
SUBSCRIPTION_OBJECT_LEAD: Final[str] = "LEAD"
BUSINESS_TYPE_LEAD_GEN: Final[str] = "LEAD_GEN"

# Seconds between requesting a lead export task and downloading it
LEAD_TASK_WAIT_SECONDS: Final[int] = 10

# Keys masked when request bodies are logged
SENSITIVE_KEYS: Final[FrozenSet[str]] = frozenset(
    {"access_token", "secret", "auth_code", "refresh_token", "password", "api_key"}
)


class HTTPMethod(Enum):
    """HTTP request methods used by the marketing API."""

    GET = "GET"
    POST = "POST"


# Environment variable names
ENV_APP_ID: Final[str] = "TIKTOK_APP_ID"
ENV_SECRET: Final[str] = "TIKTOK_SECRET"
ENV_TIMEOUT: Final[str] = "TIKTOK_TIMEOUT"
ENV_VERIFY_SSL: Final[str] = "TIKTOK_VERIFY_SSL"
ENV_SANDBOX: Final[str] = "TIKTOK_SANDBOX"
