from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class WalletKeys(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: str
    private_key: str = Field(alias="privateKey")


class ConnectWalletRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    private_key: str = Field(alias="privateKey")


class AddressResponse(BaseModel):
    address: str


class BalanceRequest(BaseModel):
    address: str
    network: Optional[str] = None


class BalanceResponse(BaseModel):
    balance: str


class SendRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_private_key: Optional[str] = Field(default=None, alias="fromPrivateKey")
    to: str
    value: str
    network: Optional[str] = None


class SendResponse(BaseModel):
    hash: str


class GeminiRequest(BaseModel):
    prompt: str


class GeminiResponse(BaseModel):
    result: Any


class ErrorResponse(BaseModel):
    error: str
