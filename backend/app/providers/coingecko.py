from __future__ import annotations

import logging

from app.config.settings import settings
from app.errors import ProviderError
from app.parsing.timestamps import iso_timestamp
from app.providers.http import build_url, get_json
from app.schemas.market import MarketSnapshot

logger = logging.getLogger(__name__)

NAME = "coingecko"
LABEL = "CoinGecko"

_SIMPLE_PRICE_PATH = "/simple/price"
_HEADERS = {"Accept-Encoding": "deflate, gzip"}


def is_configured() -> bool:
    # Public API, no key required.
    return True


def _fetch(params: dict[str, str]) -> dict:
    url = build_url(
        settings.providers.coingecko_base_url,
        _SIMPLE_PRICE_PATH,
        {"ids": "ethereum", "vs_currencies": "usd", **params},
    )
    payload = get_json(LABEL, url, headers=_HEADERS, timeout=settings.providers.market_timeout_seconds)
    if not isinstance(payload, dict) or not isinstance(payload.get("ethereum"), dict):
        raise ProviderError(LABEL, "Unexpected response payload")
    return payload["ethereum"]


def parse_price(eth_data: dict) -> float:
    price = eth_data.get("usd")
    if not isinstance(price, (int, float)) or isinstance(price, bool) or not price:
        raise ProviderError(LABEL, "Price missing from response")
    return float(price)


def parse_market(eth_data: dict) -> MarketSnapshot:
    try:
        return MarketSnapshot(
            price=eth_data["usd"],
            market_cap=eth_data["usd_market_cap"],
            volume_24h=eth_data["usd_24h_vol"],
            price_change_24h=eth_data["usd_24h_change"],
            last_updated=iso_timestamp(eth_data["last_updated_at"]),
            source=NAME,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ProviderError(LABEL, f"Incomplete market data: {exc}") from exc


def fetch_price() -> float:
    price = parse_price(_fetch({}))
    logger.info("CoinGecko API call successful")
    return price


def fetch_market() -> MarketSnapshot:
    eth_data = _fetch(
        {
            "include_market_cap": "true",
            "include_24hr_vol": "true",
            "include_24hr_change": "true",
            "include_last_updated_at": "true",
        }
    )
    snapshot = parse_market(eth_data)
    logger.info("CoinGecko market data API call successful")
    return snapshot
