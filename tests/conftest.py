import pytest
from unittest.mock import MagicMock

SENDER = "0x" + "a1" * 20
RECIPIENT = "0x" + "b2" * 20
CONTRACT_A = "0x" + "c3" * 20
CONTRACT_B = "0x" + "d4" * 20
TX_HASH = "0x" + "ab" * 32
KEY_1 = "0x" + "00" * 31 + "01"
KEY_2 = "0x" + "00" * 31 + "02"
KEY_3 = "0x" + "00" * 31 + "03"


def slot_word(n: int) -> bytes:
    return n.to_bytes(32, "big")


@pytest.fixture
def mock_web3():
    """Web3 stand-in whose storage reads return the slot number as the value."""
    mock = MagicMock()
    mock.eth.get_storage_at.side_effect = lambda address, key, block="latest": slot_word(int(key, 16))
    return mock


@pytest.fixture
def lines():
    """Collects inspection output lines instead of printing them."""
    return []
