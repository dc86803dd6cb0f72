"""Per-scenario state for the Kraken scenarios.

A fresh context is created by the first Given step of every scenario and
handed to the following steps; nothing survives from one scenario to the next.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from cex.kraken.api.messages import OpenOrdersRequest
from cex.kraken.api.models import OpenOrdersResponse, SystemStatusResponse, TickerResponse

logger = logging.getLogger(__name__)


@dataclass
class PublicContext:
    """What a public (unauthenticated) user has seen so far."""

    response_status: str = ""
    response_body: dict[str, str] = field(default_factory=dict)
    pair: Optional[str] = None

    def record_system_status(self, response: SystemStatusResponse) -> None:
        if response.result is None:
            raise AssertionError("SystemStatus response has no result")
        self.response_status = response.result.status
        self.response_body["timestamp"] = response.result.timestamp

    def record_ticker(self, pair: str, response: TickerResponse) -> None:
        kraken_pair, ticker = response.single()
        logger.debug("Ticker for %s returned as %s", pair, kraken_pair)
        self.pair = pair
        self.response_body = ticker.to_summary()


@dataclass
class AuthenticatedContext:
    """Request and responses of an authenticated user.

    The request is signed by the client when it is sent, so no signature is
    kept here.
    """

    nonce: int = 0
    request: Optional[OpenOrdersRequest] = None
    open_orders_response: Optional[OpenOrdersResponse] = None

    def open_order_ids(self) -> list[str]:
        if self.open_orders_response is None or self.open_orders_response.result is None:
            raise AssertionError("No open orders response. Ensure open orders were fetched.")
        return list(self.open_orders_response.result.open)

    def cleanup(self) -> None:
        """Log what the scenario saw and drop all state."""
        if self.open_orders_response is not None and self.open_orders_response.result is not None:
            logger.info("Open orders: %s", self.open_order_ids())
        else:
            logger.info("Scenario finished without an open orders response")
        self.nonce = 0
        self.request = None
        self.open_orders_response = None
