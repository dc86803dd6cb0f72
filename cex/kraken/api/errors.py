"""
Kraken API error types
======================

Signer errors indicate a broken credential or an encoding bug and are raised
immediately. Network and API errors are raised by the REST client so the
scenario step that triggered the call fails.
"""

from __future__ import annotations

from typing import Optional, Sequence


class KrakenError(Exception):
    """Base class for everything raised by the Kraken helpers."""


class ConfigurationError(KrakenError):
    """Required configuration (API_HOST, PUBLIC_KEY, PRIVATE_KEY) is missing."""

    def __init__(self, message: str, missing: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.missing = tuple(missing)


class SigningError(KrakenError):
    """Request signing failed."""


class DecodeError(SigningError, ValueError):
    """The API secret is not valid base64."""


class EncodingError(SigningError, ValueError):
    """The request payload cannot be form-encoded."""


class SigningKeyError(SigningError, KeyError):
    """The decoded API secret was rejected as an HMAC key."""

    def __str__(self) -> str:
        # KeyError.__str__ quotes its argument
        return str(self.args[0]) if self.args else ""


class NetworkError(KrakenError):
    """HTTP transport failure or non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class KrakenAPIError(KrakenError):
    """Kraken answered, but with a non-empty ``error`` list."""

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors = list(errors)
        super().__init__(f"Kraken API error: {self.errors}")


class ResponseFormatError(KrakenError):
    """Response body is not JSON or does not match the expected record."""
