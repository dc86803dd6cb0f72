"""Step definitions shared by every binding of the feature files.

Each binding module provides its own `kraken_config` and `kraken_client`
fixtures (live or mocked); the steps only talk to those.
"""

from __future__ import annotations

import json
import logging

import pytest
from pytest_bdd import given, parsers, then, when

from cex.kraken.api.config import KrakenConfig
from cex.kraken.api.errors import ConfigurationError
from cex.kraken.api.kraken_client import KrakenClient
from cex.kraken.api.messages import OpenOrdersRequest
from core.scenarios import AuthenticatedContext, PublicContext

logger = logging.getLogger(__name__)


TICKER_SUMMARY_KEYS = (
    "opening_price",
    "ask",
    "bid",
    "last_trade_closed",
    "volume",
    "weighted_average_price",
    "trades",
    "low",
    "high",
)


# ---------------------------------------------------------------------------
# Public user
# ---------------------------------------------------------------------------


@given("I am a public user", target_fixture="public_context")
def given_public_user() -> PublicContext:
    return PublicContext()


@when("I request the server time")
def when_request_server_time(public_context: PublicContext, kraken_client: KrakenClient) -> None:
    public_context.record_system_status(kraken_client.get_system_status())


@when(parsers.parse('I request information on "{pair}"'))
def when_request_pair_information(public_context: PublicContext, kraken_client: KrakenClient, pair: str) -> None:
    public_context.record_ticker(pair, kraken_client.get_ticker(pair))


@then("I should receive the current server time")
def then_receive_server_time(public_context: PublicContext) -> None:
    assert public_context.response_status == "online"
    assert "timestamp" in public_context.response_body

    logger.debug("Server time: %s", public_context.response_body)


@then(parsers.parse('I should receive information on "{pair}"'))
def then_receive_pair_information(public_context: PublicContext, pair: str) -> None:
    assert public_context.pair == pair
    missing = [key for key in TICKER_SUMMARY_KEYS if key not in public_context.response_body]
    assert not missing, f"Ticker summary for {pair} is missing {missing}"

    logger.debug("Currency pair: %s", pair)
    logger.debug("Currency info: %s", json.dumps(public_context.response_body, indent=2))


# ---------------------------------------------------------------------------
# Authenticated user
# ---------------------------------------------------------------------------


@pytest.fixture
def authenticated_context():
    context = AuthenticatedContext()
    yield context
    context.cleanup()


@given("I am authenticated")
def given_authenticated(
    authenticated_context: AuthenticatedContext,
    kraken_config: KrakenConfig,
    kraken_client: KrakenClient,
) -> None:
    if not kraken_config.has_credentials:
        raise ConfigurationError("PUBLIC_KEY and PRIVATE_KEY must be set for authenticated scenarios")

    authenticated_context.nonce = kraken_client.nonces.next_nonce()
    authenticated_context.request = OpenOrdersRequest(nonce=authenticated_context.nonce)


@when("I have no open orders")
def when_no_open_orders(authenticated_context: AuthenticatedContext, kraken_client: KrakenClient) -> None:
    authenticated_context.open_orders_response = kraken_client.get_open_orders(authenticated_context.request)


@then("I should see no orders")
def then_no_orders(authenticated_context: AuthenticatedContext) -> None:
    assert authenticated_context.open_order_ids() == []
