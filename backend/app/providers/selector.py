from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from app.errors import NoDataAvailable, ProviderError
from app.parsing.timestamps import utc_now_iso
from app.providers import coingecko, coinmarketcap
from app.schemas.market import MarketSnapshot, PriceResult

logger = logging.getLogger(__name__)

NO_PRICE_DATA = "No real-time price data available. APIs may be down or rate-limited."
NO_MARKET_DATA = "No real-time market data available. APIs may be down or rate-limited."


def price_providers() -> list:
    return [
        provider
        for provider in (coinmarketcap, coingecko)
        if provider.is_configured()
    ]


def market_providers() -> list:
    return [
        provider
        for provider in (coingecko, coinmarketcap)
        if provider.is_configured()
    ]


def fetch_prices() -> PriceResult:
    """Query every configured price provider at once and merge what succeeds.

    All lookups run to completion; one failing never cancels the others.
    Raises NoDataAvailable when none of them produced a price.
    """
    result = PriceResult(last_updated=utc_now_iso())
    providers = price_providers()
    if not providers:
        raise NoDataAvailable(NO_PRICE_DATA, result.errors)

    with ThreadPoolExecutor(max_workers=len(providers)) as executor:
        futures = [(provider, executor.submit(provider.fetch_price)) for provider in providers]
        for provider, future in futures:
            try:
                result.prices[provider.NAME] = future.result()
            except ProviderError as exc:
                logger.error("%s API error: %s", provider.LABEL, exc.reason)
                result.errors.append(str(exc))
            except Exception as exc:
                logger.exception("%s API error", provider.LABEL)
                result.errors.append(f"{provider.LABEL}: {exc}")

    logger.info("Real-time prices fetched: %s", result.prices)
    if not result.prices:
        raise NoDataAvailable(NO_PRICE_DATA, result.errors)
    return result


def fetch_market_with_fallback(no_data_message: str = NO_MARKET_DATA) -> MarketSnapshot:
    """Return the snapshot of the first market provider that answers."""
    errors: list[str] = []
    for provider in market_providers():
        try:
            return provider.fetch_market()
        except ProviderError as exc:
            logger.error("%s market data API error: %s", provider.LABEL, exc.reason)
            errors.append(str(exc))
        except Exception as exc:
            logger.exception("%s market data API error", provider.LABEL)
            errors.append(f"{provider.LABEL}: {exc}")

    logger.error("All ETH market data sources failed")
    raise NoDataAvailable(no_data_message, errors)
