import pytest

from app.chain.wallet import connect_wallet, create_wallet
from app.errors import InvalidKey

KNOWN_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
KNOWN_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"


def test_connect_wallet_derives_known_address() -> None:
    assert connect_wallet(KNOWN_KEY) == KNOWN_ADDRESS
    assert connect_wallet(KNOWN_KEY[2:]) == KNOWN_ADDRESS


def test_created_wallet_round_trips_through_connect() -> None:
    wallet = create_wallet()
    assert wallet.private_key.startswith("0x")
    assert len(wallet.private_key) == 66
    assert connect_wallet(wallet.private_key) == wallet.address


def test_created_wallets_are_distinct() -> None:
    addresses = {create_wallet().address for _ in range(5)}
    assert len(addresses) == 5


@pytest.mark.parametrize("bad_key", ["not-a-key", "0x1234", ""])
def test_connect_wallet_rejects_malformed_keys(bad_key: str) -> None:
    with pytest.raises(InvalidKey) as excinfo:
        connect_wallet(bad_key)
    assert excinfo.value.status_code == 400
    assert excinfo.value.message
