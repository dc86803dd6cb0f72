"""
Kraken REST API Authentication Helper
=====================================

HMAC-SHA512 signature generation for Kraken private REST endpoints.

Algorithm (API-Sign header):
    HMAC-SHA512(
        key=base64decode(api_secret),
        msg=uri_path + SHA256(nonce + postdata),
    ) -> base64

Security:
- Never logs API keys/secrets
- The decoded secret only lives for the duration of one signing call

Reference:
- https://docs.kraken.com/api/docs/guides/spot-rest-auth
"""

import base64
import binascii
import hashlib
import hmac
import threading
import time
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Callable, Dict, List, Tuple
from urllib.parse import urlencode

from cex.kraken.api.errors import DecodeError, EncodingError, SigningKeyError

CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"

_MAX_NONCE = 2**64 - 1


def _form_pairs(payload: Any) -> List[Tuple[str, Any]]:
    """Flatten a request object, mapping or pair sequence into ordered pairs."""
    if hasattr(payload, "form_fields"):
        return list(payload.form_fields())
    if isinstance(payload, Mapping):
        return list(payload.items())
    try:
        return [(key, value) for key, value in payload]
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"Unsupported payload type: {type(payload).__name__}") from exc


def _check_value(key: Any, value: Any) -> None:
    if not isinstance(key, str):
        raise EncodingError(f"Form field names must be str, got {type(key).__name__}")
    # bool is an int subclass but has no canonical form encoding
    if isinstance(value, bool) or not isinstance(value, (str, int, Decimal)):
        raise EncodingError(f"Unsupported value type for field {key!r}: {type(value).__name__}")


def _nonce_text(pairs: List[Tuple[str, Any]]) -> str:
    for key, value in pairs:
        if key != "nonce":
            continue
        text = str(value)
        if not text.isdigit() or not text.isascii():
            raise EncodingError(f"Nonce must be a non-negative integer, got {value!r}")
        if int(text) > _MAX_NONCE:
            raise EncodingError("Nonce does not fit in an unsigned 64-bit integer")
        return text
    raise EncodingError("Payload has no nonce field")


def _encode_pairs(pairs: List[Tuple[str, Any]]) -> str:
    for key, value in pairs:
        _check_value(key, value)
    try:
        return urlencode(pairs)
    except UnicodeEncodeError as exc:
        raise EncodingError(f"Payload is not valid UTF-8: {exc.reason}") from exc


def _decode_secret(secret_b64: Any) -> bytes:
    if not isinstance(secret_b64, (str, bytes)):
        raise DecodeError(f"API secret must be a base64 string, got {type(secret_b64).__name__}")
    try:
        key = base64.b64decode(secret_b64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("API secret is not valid base64") from exc
    if not key:
        raise SigningKeyError("API secret decodes to an empty key")
    return key


def encode_payload(payload: Any) -> str:
    """
    Form-encode a request payload in declaration order.

    The returned string is both the POST body and the ``postdata`` part of the
    signed message, so the two can never disagree.

    Args:
        payload: Request dataclass (``form_fields()``), mapping, or sequence of
            ``(key, value)`` pairs. Values must be str, int or Decimal.

    Returns:
        ``application/x-www-form-urlencoded`` string

    Raises:
        EncodingError: unsupported field type or text that is not valid UTF-8

    Example:
        >>> from cex.kraken.api.messages import OpenOrdersRequest
        >>> encode_payload(OpenOrdersRequest(nonce=1700000000000))
        'nonce=1700000000000'
    """
    return _encode_pairs(_form_pairs(payload))


def generate_signature(path: str, payload: Any, secret_b64: str) -> str:
    """
    Generate the HMAC-SHA512 ``API-Sign`` value for a Kraken private request.

    Args:
        path: URI path (e.g., "/0/private/OpenOrders"), ASCII, used verbatim
        payload: Request payload including its ``nonce`` (see encode_payload)
        secret_b64: Base64-encoded API secret (must not be logged)

    Returns:
        Base64-encoded HMAC-SHA512 signature

    Raises:
        DecodeError: secret is not valid base64
        EncodingError: payload or path cannot be encoded, or nonce is missing
        SigningKeyError: secret decodes to an empty key

    Example:
        >>> sig = generate_signature(
        ...     "/0/private/OpenOrders",
        ...     {"nonce": 1700000000000},
        ...     "ZXhhbXBsZV9zZWNyZXQ=",
        ... )
        >>> len(base64.b64decode(sig))  # SHA512 produces 64 bytes
        64
    """
    # One pass over the payload; it may be a one-shot iterator
    pairs = _form_pairs(payload)
    postdata = _encode_pairs(pairs)
    nonce = _nonce_text(pairs)

    try:
        path_bytes = path.encode("ascii")
    except (AttributeError, UnicodeEncodeError) as exc:
        raise EncodingError(f"API path must be an ASCII string: {path!r}") from exc

    sha256_hash = hashlib.sha256((nonce + postdata).encode("utf-8")).digest()
    message = path_bytes + sha256_hash

    mac = hmac.new(_decode_secret(secret_b64), message, hashlib.sha512)
    return base64.b64encode(mac.digest()).decode("ascii")


class NonceGenerator:
    """
    Millisecond-timestamp nonces that strictly increase.

    Two calls inside the same millisecond (or a clock step backwards) still
    get distinct, increasing values. One generator should be shared by
    everything signing with the same key pair.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_nonce(self) -> int:
        with self._lock:
            candidate = int(self._clock() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate


def build_auth_headers(api_key: str, api_secret: str, path: str, payload: Any) -> Dict[str, str]:
    """
    Build authentication headers for a Kraken private REST request.

    Args:
        api_key: API key (must not be logged)
        api_secret: Base64 API secret (must not be logged)
        path: API path (e.g., "/0/private/OpenOrders")
        payload: Request payload including its nonce

    Returns:
        Dict with API-Key, API-Sign and Content-Type

    Example:
        >>> headers = build_auth_headers(
        ...     "test_key", "ZXhhbXBsZV9zZWNyZXQ=", "/0/private/OpenOrders", {"nonce": 1}
        ... )
        >>> sorted(headers)
        ['API-Key', 'API-Sign', 'Content-Type']
    """
    return {
        "API-Key": api_key,
        "API-Sign": generate_signature(path, payload, api_secret),
        "Content-Type": CONTENT_TYPE,
    }
