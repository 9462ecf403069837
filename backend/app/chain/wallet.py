from __future__ import annotations

from eth_account import Account
from web3 import Web3

from app.errors import InvalidKey
from app.schemas.wallet import WalletKeys


def create_wallet() -> WalletKeys:
    account = Account.create()
    return WalletKeys(address=account.address, private_key=Web3.to_hex(account.key))


def connect_wallet(private_key: str) -> str:
    try:
        account = Account.from_key(private_key)
    except Exception as exc:
        raise InvalidKey(str(exc) or "invalid private key") from exc
    return account.address
