"""Protocol definitions (interfaces) for the TikTok marketing client.

These describe the two collaborators the client reads from: the
advertiser holder supplied by the caller and the HTTP session.
"""

from typing import Protocol, Any, Dict, Optional, Union


class AdvertiserLike(Protocol):
    """Anything exposing an advertiser id and its access token."""

    advertiser_id: str
    access_token: str


class HTTPResponse(Protocol):
    """The part of a ``requests.Response`` the client reads."""

    text: str
    status_code: int

    def raise_for_status(self) -> None:
        """Raise ``requests.exceptions.HTTPError`` for a 4xx/5xx status."""
        ...


class HTTPSession(Protocol):
    """Interface for the HTTP transport (``requests.Session`` compatible)."""

    def request(
        self,
        method: str,
        url: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        verify: bool = True,
        timeout: Optional[Union[float, tuple]] = None,
        **kwargs: Any,
    ) -> HTTPResponse:
        """Send a request and return the response.

        Raises:
            requests.exceptions.RequestException: On any transport failure
        """
        ...

    def close(self) -> None:
        """Release pooled connections."""
        ...
