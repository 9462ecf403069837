from __future__ import annotations

import logging

from app.config.settings import settings
from app.errors import ProviderError
from app.parsing.timestamps import iso_timestamp
from app.providers.http import build_url, get_json
from app.schemas.market import MarketSnapshot

logger = logging.getLogger(__name__)

NAME = "coinmarketcap"
LABEL = "CoinMarketCap"

_QUOTES_PATH = "/cryptocurrency/quotes/latest"


def is_configured() -> bool:
    return bool(settings.providers.coinmarketcap_api_key)


def _fetch_eth() -> dict:
    api_key = settings.providers.coinmarketcap_api_key
    if not api_key:
        raise ProviderError(LABEL, "CMC_API_KEY is not configured")

    url = build_url(
        settings.providers.coinmarketcap_base_url,
        _QUOTES_PATH,
        {"symbol": "ETH", "convert": "USD"},
    )
    payload = get_json(
        LABEL,
        url,
        headers={"X-CMC_PRO_API_KEY": api_key},
        timeout=settings.providers.market_timeout_seconds,
    )
    data = payload.get("data") if isinstance(payload, dict) else None
    eth_data = data.get("ETH") if isinstance(data, dict) else None
    # Some API versions return a list of matches per symbol.
    if isinstance(eth_data, list):
        eth_data = eth_data[0] if eth_data else None
    if not isinstance(eth_data, dict):
        raise ProviderError(LABEL, "Unexpected response payload")
    return eth_data


def _usd_quote(eth_data: dict) -> dict:
    quote = (eth_data.get("quote") or {}).get("USD")
    if not isinstance(quote, dict):
        raise ProviderError(LABEL, "USD quote missing from response")
    return quote


def parse_price(eth_data: dict) -> float:
    price = _usd_quote(eth_data).get("price")
    if not isinstance(price, (int, float)) or isinstance(price, bool):
        raise ProviderError(LABEL, "Price missing from response")
    return float(price)


def parse_market(eth_data: dict) -> MarketSnapshot:
    quote = _usd_quote(eth_data)
    try:
        return MarketSnapshot(
            price=quote["price"],
            market_cap=quote["market_cap"],
            volume_24h=quote["volume_24h"],
            price_change_24h=quote["percent_change_24h"],
            last_updated=iso_timestamp(eth_data["last_updated"]),
            source=NAME,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ProviderError(LABEL, f"Incomplete market data: {exc}") from exc


def fetch_price() -> float:
    price = parse_price(_fetch_eth())
    logger.info("CoinMarketCap API call successful")
    return price


def fetch_market() -> MarketSnapshot:
    snapshot = parse_market(_fetch_eth())
    logger.info("CoinMarketCap market data API call successful")
    return snapshot
