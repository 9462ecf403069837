from http.client import IncompleteRead
from unittest.mock import patch

import pytest

from app.config.settings import settings
from app.errors import NoDataAvailable, ProviderError
from app.providers.selector import fetch_market_with_fallback, fetch_prices
from app.schemas.market import MarketSnapshot


def build_snapshot(source: str) -> MarketSnapshot:
    return MarketSnapshot(
        price=3120.55,
        market_cap=375_000_000_000.0,
        volume_24h=14_500_000_000.0,
        price_change_24h=1.25,
        last_updated="2023-11-14T22:13:20.000Z",
        source=source,
    )


@pytest.fixture
def cmc_key(monkeypatch):
    monkeypatch.setattr(settings.providers, "coinmarketcap_api_key", "test-key")


@pytest.fixture
def no_cmc_key(monkeypatch):
    monkeypatch.setattr(settings.providers, "coinmarketcap_api_key", None)


def test_fetch_prices_merges_both_sources(cmc_key) -> None:
    with patch(
        "app.providers.selector.coinmarketcap.fetch_price", return_value=3121.4
    ), patch("app.providers.selector.coingecko.fetch_price", return_value=3119.9):
        result = fetch_prices()

    assert result.prices == {"coinmarketcap": 3121.4, "coingecko": 3119.9}
    assert result.errors == []
    assert result.last_updated.endswith("Z")


def test_fetch_prices_keeps_surviving_source(cmc_key) -> None:
    timeout = ProviderError("CoinMarketCap", "timeout of 10000ms exceeded")
    with patch(
        "app.providers.selector.coinmarketcap.fetch_price", side_effect=timeout
    ), patch(
        "app.providers.selector.coingecko.fetch_price", return_value=3119.9
    ) as coingecko_mock:
        result = fetch_prices()

    assert result.prices == {"coingecko": 3119.9}
    assert result.errors == ["CoinMarketCap: timeout of 10000ms exceeded"]
    assert coingecko_mock.call_count == 1


def test_fetch_prices_all_failing_raises_with_every_error(cmc_key) -> None:
    with patch(
        "app.providers.selector.coinmarketcap.fetch_price",
        side_effect=ProviderError("CoinMarketCap", "Request failed with status code 401"),
    ), patch(
        "app.providers.selector.coingecko.fetch_price",
        side_effect=ProviderError("CoinGecko", "Request failed with status code 429"),
    ):
        with pytest.raises(NoDataAvailable) as excinfo:
            fetch_prices()

    assert excinfo.value.status_code == 503
    assert len(excinfo.value.errors) == 2


def test_fetch_prices_skips_unconfigured_provider(no_cmc_key) -> None:
    with patch(
        "app.providers.selector.coinmarketcap.fetch_price"
    ) as cmc_mock, patch(
        "app.providers.selector.coingecko.fetch_price",
        side_effect=ProviderError("CoinGecko", "getaddrinfo ENOTFOUND"),
    ):
        with pytest.raises(NoDataAvailable) as excinfo:
            fetch_prices()

    assert cmc_mock.called is False
    assert excinfo.value.errors == ["CoinGecko: getaddrinfo ENOTFOUND"]


def test_market_first_success_stops_chain(cmc_key) -> None:
    with patch(
        "app.providers.selector.coingecko.fetch_market",
        return_value=build_snapshot("coingecko"),
    ), patch("app.providers.selector.coinmarketcap.fetch_market") as cmc_mock:
        snapshot = fetch_market_with_fallback()

    assert snapshot.source == "coingecko"
    assert cmc_mock.call_count == 0


def test_market_falls_back_to_second_provider(cmc_key) -> None:
    with patch(
        "app.providers.selector.coingecko.fetch_market",
        side_effect=ProviderError("CoinGecko", "Request failed with status code 500"),
    ), patch(
        "app.providers.selector.coinmarketcap.fetch_market",
        return_value=build_snapshot("coinmarketcap"),
    ):
        snapshot = fetch_market_with_fallback()

    assert snapshot.source == "coinmarketcap"


def test_market_without_second_provider_reports_first_error(no_cmc_key) -> None:
    with patch(
        "app.providers.selector.coingecko.fetch_market",
        side_effect=ProviderError("CoinGecko", "Request failed with status code 500"),
    ), patch("app.providers.selector.coinmarketcap.fetch_market") as cmc_mock:
        with pytest.raises(NoDataAvailable) as excinfo:
            fetch_market_with_fallback(no_data_message="nothing")

    assert cmc_mock.called is False
    assert excinfo.value.message == "nothing"
    assert excinfo.value.to_payload() == {
        "error": "nothing",
        "errors": ["CoinGecko: Request failed with status code 500"],
    }


def test_fetch_prices_records_unexpected_failure(cmc_key) -> None:
    with patch(
        "app.providers.selector.coinmarketcap.fetch_price",
        side_effect=IncompleteRead(b""),
    ), patch("app.providers.selector.coingecko.fetch_price", return_value=3000.0):
        result = fetch_prices()

    assert result.prices == {"coingecko": 3000.0}
    assert len(result.errors) == 1
    assert result.errors[0].startswith("CoinMarketCap: ")


def test_market_falls_back_after_unexpected_failure(cmc_key) -> None:
    with patch(
        "app.providers.selector.coingecko.fetch_market",
        side_effect=RuntimeError("connection reset"),
    ), patch(
        "app.providers.selector.coinmarketcap.fetch_market",
        return_value=build_snapshot("coinmarketcap"),
    ):
        snapshot = fetch_market_with_fallback()

    assert snapshot.source == "coinmarketcap"


def test_market_falls_back_when_timestamp_is_out_of_range(cmc_key) -> None:
    eth_data = {
        "usd": 3120.55,
        "usd_market_cap": 375123456789.12,
        "usd_24h_vol": 14567890123.4,
        "usd_24h_change": 3.5,
        "last_updated_at": 10**20,
    }
    with patch("app.providers.coingecko._fetch", return_value=eth_data), patch(
        "app.providers.selector.coinmarketcap.fetch_market",
        return_value=build_snapshot("coinmarketcap"),
    ):
        snapshot = fetch_market_with_fallback()

    assert snapshot.source == "coinmarketcap"
