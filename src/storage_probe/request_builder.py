# storage_probe/request_builder.py
"""Maps a fetched transaction onto eth_createAccessList parameters."""

from typing import Any, Dict, List, Optional

from .transactions import TransactionRecord, TxValue

DEFAULT_BLOCK = "latest"


def to_hex_quantity(value: TxValue) -> Optional[str]:
    """
    Normalize a transaction value to a hex quantity string.

    Absent values stay absent, strings are assumed to be formatted already and
    are returned unchanged, integers are hex encoded.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Unsupported value type: {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Transaction value cannot be negative: {value}")
    return hex(value)


def build_call_object(tx: TransactionRecord) -> Dict[str, Any]:
    call: Dict[str, Any] = {"from": tx.sender}
    if tx.recipient is not None:
        call["to"] = tx.recipient
    value = to_hex_quantity(tx.value)
    if value is not None:
        call["value"] = value
    call["data"] = tx.data
    return call


def build_access_list_params(tx: TransactionRecord, block: str = DEFAULT_BLOCK) -> List[Any]:
    """Return the ``[call, block]`` parameter list for eth_createAccessList."""
    return [build_call_object(tx), block]
