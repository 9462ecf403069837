from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class PriceResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prices: dict[str, float] = Field(default_factory=dict)
    last_updated: str = Field(alias="lastUpdated")
    errors: list[str] = Field(default_factory=list)


class MarketSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "Ethereum"
    symbol: str = "ETH"
    price: float
    market_cap: float
    volume_24h: float
    price_change_24h: float
    last_updated: str
    source: str


AnalysisSource = Literal["gemini", "fallback"]


class AnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    source: AnalysisSource
    based_on: str = Field(default="real-time-data", alias="basedOn")


class MarketAnalysis(BaseModel):
    market: MarketSnapshot
    analysis: AnalysisResult
    error: Optional[str] = None


class NoDataResponse(BaseModel):
    error: str
    errors: list[str] = Field(default_factory=list)
