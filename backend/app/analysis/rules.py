from __future__ import annotations

from app.config.settings import settings
from app.schemas.market import AnalysisResult

BULLISH = "Ethereum shows bullish momentum with significant price increase over 24h."
MODEST_GAIN = "Ethereum shows modest gains with slightly positive momentum."
MINOR_BEARISH = "Ethereum shows minor bearish sentiment with a slight price decrease."
NOTABLE_BEARISH = "Ethereum shows notable bearish momentum with significant price decline."

FALLBACK_DISCLAIMER = " (This is a basic fallback analysis as Gemini API request failed)"


def classify_change(price_change_24h: float) -> str:
    thresholds = settings.analysis
    if price_change_24h > thresholds.bullish_threshold:
        return BULLISH
    if price_change_24h > 0:
        return MODEST_GAIN
    if price_change_24h > thresholds.bearish_threshold:
        return MINOR_BEARISH
    return NOTABLE_BEARISH


def fallback_analysis(price_change_24h: float) -> AnalysisResult:
    return AnalysisResult(
        text=classify_change(price_change_24h) + FALLBACK_DISCLAIMER,
        source="fallback",
    )
