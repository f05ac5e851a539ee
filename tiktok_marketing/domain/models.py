"""Domain models for the TikTok marketing client.

These models describe what callers hand to the client (advertisers,
per-request options) and what comes back (decoded JSON values).
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from tiktok_marketing.core.config import coerce_bool
from tiktok_marketing.core.constants import LEGACY_SANDBOX_KEY, LEGACY_VERIFY_SSL_KEY


# Decoded response value. Plain text when the body was not JSON.
JsonValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


@dataclass(frozen=True)
class Advertiser:
    """An advertiser account and the access token authorizing it."""

    advertiser_id: str
    access_token: str = field(repr=False)

    def __post_init__(self):
        """Validate required fields."""
        if not self.advertiser_id:
            raise ValueError("Advertiser ID cannot be empty")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Advertiser":
        """Create from a token-exchange result or stored record.

        Args:
            data: Mapping with ``advertiser_id`` and ``access_token``

        Returns:
            Advertiser instance
        """
        return cls(
            advertiser_id=str(data["advertiser_id"]),
            access_token=str(data["access_token"]),
        )


@dataclass(frozen=True)
class RequestOptions:
    """Per-request transport options, kept out of the JSON body.

    Attributes:
        sandbox: Route the request to the sandbox host
        verify_ssl: Verify the server's TLS certificate
    """

    sandbox: bool = False
    verify_ssl: bool = True

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        verify_ssl: bool = True,
    ) -> Tuple["RequestOptions", Dict[str, Any]]:
        """Split legacy ``sandbox``/``verifyssl`` keys out of a payload.

        Args:
            payload: Request body that may carry the legacy keys
            verify_ssl: Value used when the payload has no ``verifyssl`` key

        Returns:
            Tuple of (options, copy of the payload without those keys)

        Raises:
            ConfigurationError: If a legacy key holds something other than
                a boolean or a "true"/"false"-style string
        """
        body = dict(payload)
        sandbox = coerce_bool(body.pop(LEGACY_SANDBOX_KEY, None), LEGACY_SANDBOX_KEY)
        verify = coerce_bool(
            body.pop(LEGACY_VERIFY_SSL_KEY, None), LEGACY_VERIFY_SSL_KEY, default=verify_ssl
        )
        return cls(sandbox=sandbox, verify_ssl=verify), body


def unwrap_response(value: JsonValue) -> JsonValue:
    """Return the ``data`` member of a response envelope, or the value itself.

    A null ``data`` counts as absent so that error envelopes
    (``{"code": 40001, "message": ..., "data": null}``) reach the caller whole.
    """
    if isinstance(value, dict) and value.get("data") is not None:
        return value["data"]
    return value


def decode_response(text: str) -> JsonValue:
    """Decode a response body and unwrap its envelope.

    Bodies that are not valid JSON are returned unchanged as text.
    """
    try:
        value = json.loads(text)
    except ValueError:
        return text
    return unwrap_response(value)
