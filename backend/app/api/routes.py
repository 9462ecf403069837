from fastapi import APIRouter

from app.analysis.market import analyze_market
from app.chain.transactions import get_balance, send_transaction
from app.chain.wallet import connect_wallet, create_wallet
from app.errors import GatewayError, GenerationError, ProviderError, UnexpectedError
from app.providers import gemini
from app.providers.selector import fetch_market_with_fallback, fetch_prices
from app.schemas.market import MarketAnalysis, MarketSnapshot, NoDataResponse, PriceResult
from app.schemas.wallet import (
    AddressResponse,
    BalanceRequest,
    BalanceResponse,
    ConnectWalletRequest,
    ErrorResponse,
    GeminiRequest,
    GeminiResponse,
    SendRequest,
    SendResponse,
    WalletKeys,
)

router = APIRouter()

_CLIENT_ERROR = {400: {"model": ErrorResponse}}
_MARKET_ERRORS = {
    500: {"model": ErrorResponse},
    503: {"model": NoDataResponse},
}


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.post("/create-wallet", response_model=WalletKeys)
def create_wallet_endpoint() -> WalletKeys:
    return create_wallet()


@router.post("/connect-wallet", response_model=AddressResponse, responses=_CLIENT_ERROR)
def connect_wallet_endpoint(payload: ConnectWalletRequest) -> AddressResponse:
    return AddressResponse(address=connect_wallet(payload.private_key))


@router.post("/balance", response_model=BalanceResponse, responses=_CLIENT_ERROR)
def balance_endpoint(payload: BalanceRequest) -> BalanceResponse:
    return BalanceResponse(balance=get_balance(payload.address, payload.network))


@router.post("/send", response_model=SendResponse, responses=_CLIENT_ERROR)
def send_endpoint(payload: SendRequest) -> SendResponse:
    tx_hash = send_transaction(
        payload.from_private_key, payload.to, payload.value, payload.network
    )
    return SendResponse(hash=tx_hash)


@router.post("/gemini-analyze", response_model=GeminiResponse, responses=_CLIENT_ERROR)
def gemini_analyze_endpoint(payload: GeminiRequest) -> GeminiResponse:
    try:
        result = gemini.generate_content(payload.prompt)
    except ProviderError as exc:
        raise GenerationError(exc.reason) from exc
    return GeminiResponse(result=result)


@router.get("/eth-price", response_model=PriceResult, responses=_MARKET_ERRORS)
def eth_price_endpoint() -> PriceResult:
    return fetch_prices()


@router.get("/eth-market", response_model=MarketSnapshot, responses=_MARKET_ERRORS)
def eth_market_endpoint() -> MarketSnapshot:
    return fetch_market_with_fallback()


@router.get(
    "/eth-market-analyze",
    response_model=MarketAnalysis,
    response_model_exclude_none=True,
    responses=_MARKET_ERRORS,
)
def eth_market_analyze_endpoint() -> MarketAnalysis:
    try:
        return analyze_market()
    except GatewayError:
        raise
    except Exception as exc:
        raise UnexpectedError(f"Failed to analyze Ethereum data: {exc}") from exc
