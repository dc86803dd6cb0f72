"""Tests for KrakenConfig environment loading."""

from pathlib import Path
import sys
from unittest.mock import patch

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cex.kraken.api.config import KrakenConfig
from cex.kraken.api.errors import ConfigurationError

FULL_ENV = {
    "API_HOST": "https://api.kraken.com",
    "PUBLIC_KEY": "public",
    "PRIVATE_KEY": "ZXhhbXBsZV9zZWNyZXQ=",
}


class TestFromEnv:
    def test_reads_all_values(self) -> None:
        config = KrakenConfig.from_env(FULL_ENV)

        assert config.api_host == "https://api.kraken.com"
        assert config.public_key == "public"
        assert config.private_key == "ZXhhbXBsZV9zZWNyZXQ="
        assert config.has_credentials

    @patch.dict("os.environ", FULL_ENV, clear=True)
    def test_defaults_to_process_environment(self) -> None:
        assert KrakenConfig.from_env().public_key == "public"

    def test_reports_every_missing_variable(self) -> None:
        with pytest.raises(ConfigurationError) as excinfo:
            KrakenConfig.from_env({"API_HOST": "https://api.kraken.com"})

        assert excinfo.value.missing == ("PUBLIC_KEY", "PRIVATE_KEY")
        assert "PUBLIC_KEY, PRIVATE_KEY" in str(excinfo.value)

    def test_blank_values_count_as_missing(self) -> None:
        env = dict(FULL_ENV, PRIVATE_KEY="   ")

        with pytest.raises(ConfigurationError, match="PRIVATE_KEY"):
            KrakenConfig.from_env(env)

    def test_api_host_always_required(self) -> None:
        with pytest.raises(ConfigurationError, match="API_HOST"):
            KrakenConfig.from_env({}, require_credentials=False)

    def test_public_only(self) -> None:
        config = KrakenConfig.from_env({"API_HOST": "https://api.kraken.com"}, require_credentials=False)

        assert not config.has_credentials
        assert config.public_key is None


class TestKrakenConfig:
    def test_trailing_slash_is_stripped_from_host(self) -> None:
        assert KrakenConfig(api_host="https://api.kraken.com//").api_host == "https://api.kraken.com"

    def test_private_key_not_in_repr(self) -> None:
        config = KrakenConfig.from_env(FULL_ENV)

        assert "ZXhhbXBsZV9zZWNyZXQ=" not in repr(config)
        assert "public" in repr(config)
