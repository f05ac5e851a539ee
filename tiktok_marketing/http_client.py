"""HTTP client for the TikTok Marketing API.

This module builds and sends the JSON requests every operation uses and
normalizes the platform's response envelope.

API Specifics:
- app_id and secret travel in every request body, GET requests included
- the advertiser's access token is sent both in the body and as the
  ``Access-Token`` header
- responses wrap their payload as ``{"code", "message", "data"}``
- sandbox and production live on different hosts with the same paths

No retries are attempted. Transport errors and 4xx/5xx statuses
(``requests.exceptions.HTTPError``) are re-raised as-is.
"""

from typing import Any, Dict, Mapping, Optional, Union

import requests
from loguru import logger

from tiktok_marketing.core.config import ClientConfig
from tiktok_marketing.core.constants import (
    ACCESS_TOKEN_HEADER,
    BASE_URL,
    CONTENT_TYPE_JSON,
    SANDBOX_URL,
    SENSITIVE_KEYS,
    HTTPMethod,
)
from tiktok_marketing.core.protocols import HTTPSession
from tiktok_marketing.domain.models import JsonValue, RequestOptions, decode_response
from tiktok_marketing.endpoints import TikTokEndPoint


class TikTokHTTPClient:
    """Signed JSON request executor for the TikTok Marketing API.

    The client keeps no per-request state: the configuration is frozen and
    every call builds its own body and headers, so one instance can be used
    from several threads as long as the session allows it.

    Attributes:
        config: Credentials and transport defaults
        session: HTTP transport (``requests.Session`` compatible)
    """

    def __init__(self, config: ClientConfig, session: Optional[HTTPSession] = None):
        """Initialize the HTTP client.

        Args:
            config: Credentials and transport defaults
            session: Optional transport; a ``requests.Session`` is created
                (and owned) when omitted
        """
        self.config = config
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    @staticmethod
    def base_url(sandbox: bool = False) -> str:
        """Return the API base URL for the selected environment."""
        return SANDBOX_URL if sandbox else BASE_URL

    def build_url(self, path: Union[str, TikTokEndPoint], sandbox: bool = False) -> str:
        """Join an endpoint path onto the selected base URL."""
        if isinstance(path, TikTokEndPoint):
            path = path.value
        return f"{self.base_url(sandbox)}/{path}"

    def build_body(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge the application credentials into a copy of ``data``.

        The configured ``app_id`` and ``secret`` always replace caller values.
        """
        body = dict(data)
        body["app_id"] = self.config.app_id
        body["secret"] = self.config.secret
        return body

    @staticmethod
    def build_headers(body: Mapping[str, Any]) -> Dict[str, str]:
        """Build request headers, mirroring a body ``access_token`` into ``Access-Token``."""
        headers = {"Content-Type": CONTENT_TYPE_JSON}
        if body.get("access_token") is not None:
            headers[ACCESS_TOKEN_HEADER] = str(body["access_token"])
        return headers

    def execute(
        self,
        path: Union[str, TikTokEndPoint],
        data: Optional[Mapping[str, Any]] = None,
        method: Union[str, HTTPMethod] = HTTPMethod.POST,
        options: Optional[RequestOptions] = None,
    ) -> JsonValue:
        """Send one request and return the normalized response.

        ``sandbox`` and ``verifyssl`` keys found in ``data`` are removed from
        the body; they select the host and TLS verification when ``options``
        is not given.

        Args:
            path: Endpoint path relative to the base URL
            data: Operation-specific body fields
            method: HTTP method (default POST)
            options: Explicit sandbox / TLS options

        Returns:
            The envelope's ``data`` member, the decoded body when there is
            none, or the raw text when the body is not JSON

        Raises:
            requests.exceptions.RequestException: On any transport failure,
                including ``HTTPError`` for 4xx/5xx statuses
        """
        payload_options, payload = RequestOptions.from_payload(
            data or {}, verify_ssl=self.config.verify_ssl
        )
        if options is None:
            options = payload_options

        if isinstance(method, HTTPMethod):
            method = method.value

        body = self.build_body(payload)
        headers = self.build_headers(body)
        url = self.build_url(path, sandbox=options.sandbox)

        logger.debug(f"{method} {url}")
        logger.debug(f"Body: {self._sanitize_log_data(body)}")

        try:
            response = self.session.request(
                method,
                url,
                json=body,
                headers=headers,
                verify=options.verify_ssl,
                timeout=self.config.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            # Include response status/body when available for faster diagnostics
            status = getattr(getattr(e, "response", None), "status_code", None)
            if status:
                body_text = getattr(e.response, "text", "") or ""
                logger.error(
                    f"TikTok API request failed: {method} {url}: {e} "
                    f"(status={status}, body={body_text[:500]})"
                )
            else:
                logger.error(f"TikTok API request failed: {method} {url}: {e}")
            raise

        text = response.text
        logger.debug(f"Response {response.status_code} ({len(text)} bytes)")

        return decode_response(text)

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self.session:
            self.session.close()

    @classmethod
    def _sanitize_log_data(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Mask credentials in a (possibly nested) body before logging.

        Args:
            data: Body to sanitize

        Returns:
            Sanitized copy of data
        """
        sanitized = {}

        for key, value in data.items():
            if key.lower() in SENSITIVE_KEYS:
                sanitized[key] = "***REDACTED***"
            elif isinstance(value, Mapping):
                sanitized[key] = cls._sanitize_log_data(value)
            else:
                sanitized[key] = value

        return sanitized
