# storage_probe/transactions.py
"""
Transaction fetching.

Looks up a single transaction by hash through web3.py and reduces it to the
fields needed to rebuild the call: sender, recipient, value and call data.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

import structlog
from web3 import Web3
from web3.exceptions import TransactionNotFound

from .exceptions import TransactionNotFoundError

logger = structlog.get_logger()

# None (absent), a pre-formatted hex string, or an arbitrary precision integer
TxValue = Union[None, str, int]


@dataclass(frozen=True)
class TransactionRecord:
    tx_hash: str
    sender: str
    recipient: Optional[str]  # None for contract creation
    value: TxValue
    data: str


def _as_hex(data: Any) -> str:
    if data is None:
        return "0x"
    if isinstance(data, str):
        return data if data.startswith("0x") else "0x" + data
    return Web3.to_hex(data)


def fetch_transaction(web3: Web3, tx_hash: str) -> TransactionRecord:
    """
    Retrieve a transaction from the provider.

    Args:
        web3: Connected Web3 instance
        tx_hash: Transaction hash as a 0x-prefixed hex string

    Returns:
        The transaction's sender, recipient, value and call data

    Raises:
        TransactionNotFoundError: If the provider has no such transaction
    """
    logger.info("Fetching transaction", tx_hash=tx_hash)
    try:
        tx = web3.eth.get_transaction(tx_hash)
    except TransactionNotFound:
        raise TransactionNotFoundError(tx_hash)

    if not tx:
        raise TransactionNotFoundError(tx_hash)

    # web3.py exposes call data as "input"; raw JSON from some providers uses "data"
    data = tx.get("input")
    if data is None:
        data = tx.get("data")

    record = TransactionRecord(
        tx_hash=tx_hash,
        sender=tx.get("from"),
        recipient=tx.get("to"),
        value=tx.get("value"),
        data=_as_hex(data),
    )
    logger.debug(
        "Transaction fetched",
        tx_hash=tx_hash,
        sender=record.sender,
        recipient=record.recipient,
        value=record.value,
    )
    return record
