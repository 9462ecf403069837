from __future__ import annotations

import logging

from app.config.settings import settings
from app.errors import ProviderError
from app.providers.http import build_url, post_json

logger = logging.getLogger(__name__)

NAME = "gemini"
LABEL = "Gemini"

NO_TEXT_MESSAGE = "Analysis not available from Gemini API response"


def is_configured() -> bool:
    return bool(settings.providers.gemini_api_key)


def generate_content(prompt: str, timeout: float | None = None) -> dict:
    """POST a single-turn prompt to ``generateContent`` and return the raw JSON."""
    api_key = settings.providers.gemini_api_key
    if not api_key:
        raise ProviderError(LABEL, "GEMINI_API_KEY is not configured")

    url = build_url(
        settings.providers.gemini_base_url,
        f"/models/{settings.providers.gemini_model}:generateContent",
    )
    payload = post_json(
        LABEL,
        url,
        {"contents": [{"parts": [{"text": prompt}]}]},
        headers={"x-goog-api-key": api_key},
        timeout=timeout or settings.providers.gemini_timeout_seconds,
    )
    if not isinstance(payload, dict):
        raise ProviderError(LABEL, "Unexpected response payload")
    return payload


def extract_text(payload: dict) -> str:
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return NO_TEXT_MESSAGE
    return text or NO_TEXT_MESSAGE


def generate_text(prompt: str) -> str:
    text = extract_text(generate_content(prompt))
    logger.info("Gemini analysis generated")
    return text
