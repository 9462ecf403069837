from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from web3 import Web3

from app.chain.networks import get_web3
from app.config.settings import settings
from app.errors import QueryError, SendError

logger = logging.getLogger(__name__)

WEI_PER_ETHER = 10**18


def format_ether(wei: int) -> str:
    """Wei as a decimal ether string, always with a fractional part ("1.0", "0.25")."""
    sign = "-" if wei < 0 else ""
    whole, fraction = divmod(abs(int(wei)), WEI_PER_ETHER)
    fraction_text = f"{fraction:018d}".rstrip("0") or "0"
    return f"{sign}{whole}.{fraction_text}"


def parse_ether(value: str) -> int:
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"invalid decimal value: {value!r}") from exc
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"invalid decimal value: {value!r}")
    wei = amount * WEI_PER_ETHER
    if wei != wei.to_integral_value():
        raise ValueError(f"too many decimals for ether: {value!r}")
    return int(wei)


def get_balance(address: str, network: str | None) -> str:
    try:
        w3 = get_web3(network)
        balance = w3.eth.get_balance(Web3.to_checksum_address(address))
    except Exception as exc:
        raise QueryError(str(exc)) from exc
    return format_ether(balance)


def _signing_key(from_private_key: str | None) -> str:
    if from_private_key:
        return from_private_key
    if settings.allow_default_signer and settings.private_key:
        logger.warning("No fromPrivateKey supplied; signing with the default PRIVATE_KEY")
        return settings.private_key
    raise ValueError("fromPrivateKey is required")


def send_transaction(
    from_private_key: str | None, to: str, value: str, network: str | None
) -> str:
    """Sign and broadcast an ETH transfer, then block until it is mined."""
    try:
        w3 = get_web3(network)
        account = w3.eth.account.from_key(_signing_key(from_private_key))
        recipient = Web3.to_checksum_address(to)
        wei = parse_ether(value)

        tx = {
            "to": recipient,
            "value": wei,
            "nonce": w3.eth.get_transaction_count(account.address),
            "chainId": w3.eth.chain_id,
            "gasPrice": w3.eth.gas_price,
        }
        tx["gas"] = w3.eth.estimate_gas({**tx, "from": account.address})

        signed = account.sign_transaction(tx)
        tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
        receipt = w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=settings.networks.tx_confirm_timeout_seconds
        )
    except Exception as exc:
        raise SendError(str(exc)) from exc

    if receipt.get("status") == 0:
        raise SendError(f"transaction execution reverted (hash={Web3.to_hex(tx_hash)})")

    hash_hex = Web3.to_hex(tx_hash)
    logger.info("Transaction %s confirmed", hash_hex)
    return hash_hex
