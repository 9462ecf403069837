from __future__ import annotations

from app.schemas.market import MarketSnapshot

PROMPT_TEMPLATE = """
Analyze this real-time Ethereum market data:

Price: ${price}
24h Change: {change}%
Market Cap: ${market_cap}
24h Volume: ${volume}
Data Source: {source}
Last Updated: {last_updated}

Provide a precise, data-driven trading analysis in 2-3 sentences about the current Ethereum market conditions based ONLY on this real-time data.
"""


def format_number(value: float) -> str:
    """Thousands separators and at most three fraction digits."""
    text = f"{value:,.3f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_percent(value: float) -> str:
    return f"{value:.2f}"


def build_prompt(snapshot: MarketSnapshot) -> str:
    return PROMPT_TEMPLATE.format(
        price=format_number(snapshot.price),
        change=format_percent(snapshot.price_change_24h),
        market_cap=format_number(snapshot.market_cap),
        volume=format_number(snapshot.volume_24h),
        source=snapshot.source,
        last_updated=snapshot.last_updated,
    )
