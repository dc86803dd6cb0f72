"""Shared test fixtures for pytest.

Provides known credentials and a fake configuration used across test files.
Nothing here talks to a real exchange.
"""

import pytest

from cex.kraken.api.config import KrakenConfig

# base64("example_secret")
EXAMPLE_SECRET = "ZXhhbXBsZV9zZWNyZXQ="

# Example credentials from Kraken's REST authentication guide
KRAKEN_DOCS_SECRET = "kQH5HW/8p1uGOVjbgWA7FunAmGO8lsSUXNsu3eow76sz84Q18fWxnyRzBHCd3pd5nE9qa99HAZtuZuj6F1huXg=="


@pytest.fixture
def kraken_secret() -> str:
    """A base64 API secret that decodes to b"example_secret"."""
    return EXAMPLE_SECRET


@pytest.fixture
def kraken_docs_secret() -> str:
    return KRAKEN_DOCS_SECRET


@pytest.fixture
def kraken_config(kraken_secret: str) -> KrakenConfig:
    """Config pointing at a non-routable host with fake credentials."""
    return KrakenConfig(api_host="https://api.kraken.test/", public_key="test_key", private_key=kraken_secret)
