from __future__ import annotations

import logging

from app.analysis.prompt import build_prompt
from app.analysis.rules import fallback_analysis
from app.errors import ProviderError
from app.providers import gemini
from app.providers.selector import fetch_market_with_fallback
from app.schemas.market import AnalysisResult, MarketAnalysis, MarketSnapshot

logger = logging.getLogger(__name__)

NO_ANALYSIS_DATA = (
    "No real-time market data available for analysis. APIs may be down or rate-limited."
)


def annotate_snapshot(snapshot: MarketSnapshot) -> MarketAnalysis:
    """Attach a Gemini analysis, or the rule-based one if Gemini is unavailable."""
    try:
        text = gemini.generate_text(build_prompt(snapshot))
    except ProviderError as exc:
        logger.error("Gemini API error: %s", exc.reason)
        return MarketAnalysis(
            market=snapshot,
            analysis=fallback_analysis(snapshot.price_change_24h),
            error=f"Gemini API error: {exc.reason}",
        )

    return MarketAnalysis(
        market=snapshot,
        analysis=AnalysisResult(text=text, source="gemini"),
    )


def analyze_market() -> MarketAnalysis:
    snapshot = fetch_market_with_fallback(no_data_message=NO_ANALYSIS_DATA)
    return annotate_snapshot(snapshot)
