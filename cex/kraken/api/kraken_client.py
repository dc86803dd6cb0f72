"""
Kraken REST Client
==================

Thin requests-based client for the endpoints the scenarios exercise.

Features:
- Public API (SystemStatus, Ticker)
- Authenticated API (OpenOrders)
- One HTTP call per operation; failures raise instead of returning defaults

Usage:
    from cex.kraken.api.config import KrakenConfig
    from cex.kraken.api.kraken_client import KrakenClient

    with KrakenClient(KrakenConfig.from_env()) as client:
        status = client.get_system_status()
        orders = client.get_open_orders()
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

import requests
from pydantic import ValidationError

from cex.kraken.api.auth import NonceGenerator, build_auth_headers, encode_payload
from cex.kraken.api.config import KrakenConfig
from cex.kraken.api.errors import (
    ConfigurationError,
    KrakenAPIError,
    NetworkError,
    ResponseFormatError,
)
from cex.kraken.api.messages import OpenOrdersRequest
from cex.kraken.api.models import (
    KrakenModel,
    OpenOrdersResponse,
    SystemStatusResponse,
    TickerResponse,
)

logger = logging.getLogger(__name__)

SYSTEM_STATUS_PATH = "/0/public/SystemStatus"
TICKER_PATH = "/0/public/Ticker"
OPEN_ORDERS_PATH = "/0/private/OpenOrders"

ModelT = TypeVar("ModelT", bound=KrakenModel)


class KrakenClient:
    """
    Kraken REST client.

    Takes an explicit KrakenConfig; no environment lookups happen here.
    Private calls share one NonceGenerator so nonces keep increasing for the
    configured key pair.
    """

    def __init__(
        self,
        config: KrakenConfig,
        session: Optional[requests.Session] = None,
        timeout: int = 10,
        nonces: Optional[NonceGenerator] = None,
    ):
        """
        Initialize Kraken client.

        Args:
            config: Host and credentials
            session: Optional requests session (a new one is created otherwise)
            timeout: Request timeout in seconds (default: 10)
            nonces: Nonce source for private calls
        """
        self.config = config
        self.timeout = timeout
        self.nonces = nonces or NonceGenerator()
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def close(self):
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # ==================== Transport ====================

    def _url(self, path: str) -> str:
        return f"{self.config.api_host}{path}"

    def _send(self, method: str, path: str, call: Callable[..., requests.Response], **kwargs: Any) -> dict[str, Any]:
        logger.debug("%s %s", method, path)
        try:
            response = call(self._url(path), timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"Kraken {method} {path} failed with HTTP {status}")
            raise NetworkError(f"Kraken {method} {path} failed: {e}", status_code=status) from e
        except requests.RequestException as e:
            logger.error(f"Kraken {method} {path} request failed: {e}")
            raise NetworkError(f"Kraken {method} {path} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Kraken {path} returned a non-JSON body")
            raise ResponseFormatError(f"Kraken {path} returned a non-JSON body") from e
        if not isinstance(data, dict):
            logger.error(f"Unexpected response type from {path}: {type(data)}")
            raise ResponseFormatError(f"Unexpected response type from {path}: {type(data)}")
        return data

    def _parse(self, model: type[ModelT], path: str, data: dict[str, Any]) -> ModelT:
        errors = data.get("error") or []
        if errors:
            logger.error(f"Kraken {path} returned errors: {errors}")
            raise KrakenAPIError(errors)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected {model.__name__} shape from {path}: {e.error_count()} validation error(s)")
            raise ResponseFormatError(f"Unexpected {model.__name__} shape from {path}: {e}") from e

    # ==================== Public API Methods ====================

    def get_system_status(self) -> SystemStatusResponse:
        """
        Get the exchange's current system status and server timestamp.

        Returns:
            SystemStatusResponse (result.status is "online" when trading)
        """
        data = self._send("GET", SYSTEM_STATUS_PATH, self.session.get)
        return self._parse(SystemStatusResponse, SYSTEM_STATUS_PATH, data)

    def get_ticker(self, pair: str) -> TickerResponse:
        """
        Get ticker information for one asset pair.

        Args:
            pair: Asset pair (e.g., 'XBTUSD'); Kraken keys the result by its
                own pair name (e.g., 'XXBTZUSD')
        """
        pair = pair.strip()
        if not pair:
            raise ValueError("pair is required")
        data = self._send("GET", TICKER_PATH, self.session.get, params={"pair": pair})
        return self._parse(TickerResponse, TICKER_PATH, data)

    # ==================== Authenticated API Methods ====================

    def _private_post(self, path: str, request: Any) -> dict[str, Any]:
        if not self.config.has_credentials:
            raise ConfigurationError("PUBLIC_KEY and PRIVATE_KEY required for authenticated endpoints")
        headers = build_auth_headers(self.config.public_key, self.config.private_key, path, request)
        return self._send("POST", path, self.session.post, headers=headers, data=encode_payload(request))

    def get_open_orders(self, request: Optional[OpenOrdersRequest] = None) -> OpenOrdersResponse:
        """
        Get the account's open orders (requires authentication).

        Args:
            request: Signed request shape; a fresh nonce is used when omitted

        Returns:
            OpenOrdersResponse with result.open keyed by order id
        """
        if request is None:
            request = OpenOrdersRequest(nonce=self.nonces.next_nonce())
        data = self._private_post(OPEN_ORDERS_PATH, request)
        return self._parse(OpenOrdersResponse, OPEN_ORDERS_PATH, data)
