"""Exception hierarchy for the TikTok marketing client.

Only configuration problems are raised by the client itself. Transport
failures come from ``requests`` and reach the caller untouched; the
``TransportError`` name below is an alias for catching them.
"""

from typing import Optional, Dict, Any

import requests


class TikTokError(Exception):
    """Base exception for all errors raised by this package.

    Catch this to handle every client-side error at once.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(TikTokError):
    """Raised when a required credential or setting is missing or invalid.

    Examples:
        - No auth code supplied for the token exchange
        - Credentials file not found or not a mapping
        - Non-numeric timeout value
    """

    pass


# Raised by the transport (connection, TLS, timeout) and never wrapped.
TransportError = requests.exceptions.RequestException
