"""Domain layer - models shared by the client and its callers."""

from tiktok_marketing.domain.models import (
    Advertiser,
    JsonValue,
    RequestOptions,
    decode_response,
    unwrap_response,
)

__all__ = [
    "Advertiser",
    "JsonValue",
    "RequestOptions",
    "decode_response",
    "unwrap_response",
]
