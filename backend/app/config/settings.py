from __future__ import annotations

from typing import List

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NetworkSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ETHGATEWAY_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )
    sepolia_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SEPOLIA_URL", "ETHGATEWAY_SEPOLIA_URL"),
    )
    mainnet_url: str | None = Field(
        default="https://mainnet.infura.io/v3/YOUR_PROJECT_ID",
        validation_alias=AliasChoices("MAINNET_URL", "ETHGATEWAY_MAINNET_URL"),
    )
    default_network: str = "sepolia"
    rpc_timeout_seconds: float = 30.0
    tx_confirm_timeout_seconds: float = 120.0


class ProviderSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ETHGATEWAY_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )
    coinmarketcap_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CMC_API_KEY", "ETHGATEWAY_COINMARKETCAP_API_KEY"),
    )
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "ETHGATEWAY_GEMINI_API_KEY"),
    )
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    coinmarketcap_base_url: str = "https://pro-api.coinmarketcap.com/v1"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-pro"
    market_timeout_seconds: float = 10.0
    gemini_timeout_seconds: float = 15.0


class AnalysisSettings(BaseModel):
    bullish_threshold: float = 2.0
    bearish_threshold: float = -2.0


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ETHGATEWAY_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    private_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("PRIVATE_KEY", "ETHGATEWAY_PRIVATE_KEY"),
    )
    # Sending without fromPrivateKey signs with private_key when enabled.
    allow_default_signer: bool = True

    host: str = "0.0.0.0"
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("PORT", "ETHGATEWAY_PORT"),
    )
    log_level: str = "INFO"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    networks: NetworkSettings = Field(default_factory=NetworkSettings)
    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)


settings = Settings()
