# storage_probe/storage_inspector.py
"""
Storage slot inspection for an access list.

Every (address, storage key) pair is read one at a time, in access list order.
A failed read is logged and recorded, and the scan moves on to the next key.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

import structlog
from web3 import Web3

from .rpc_client import AccessListEntry

logger = structlog.get_logger()


@dataclass(frozen=True)
class StorageQueryResult:
    address: str
    storage_key: str
    value: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def read_storage_slot(web3: Web3, address: str, storage_key: str, block: str = "latest") -> str:
    """Read one storage word and return it as a 0x-prefixed hex string."""
    raw = web3.eth.get_storage_at(Web3.to_checksum_address(address), storage_key, block)
    return Web3.to_hex(raw)


def inspect_storage(
    web3: Web3,
    access_list: Iterable[AccessListEntry],
    out: Callable[[str], None] = print,
    block: str = "latest",
) -> List[StorageQueryResult]:
    """
    Read and print the current value of every storage key in an access list.

    Args:
        web3: Connected Web3 instance
        access_list: Entries returned by eth_createAccessList
        out: Line sink for the human readable report
        block: Block tag to read storage at

    Returns:
        One result per storage key, in the order the keys were read
    """
    results: List[StorageQueryResult] = []
    out("\n=== Access list storage scan start ===")
    for entry in access_list:
        out(f"\n-- Address: {entry.address} --")
        if not entry.storage_keys:
            out("  No storage keys to query.")
            logger.info("Skipping address without storage keys", address=entry.address)
            continue

        for key in entry.storage_keys:
            try:
                value = read_storage_slot(web3, entry.address, key, block)
            except Exception as e:
                logger.error(
                    "Storage read failed",
                    address=entry.address,
                    storage_key=key,
                    error=str(e),
                )
                out(f"  [Error] address={entry.address}, storageKey={key}: {e}")
                results.append(StorageQueryResult(entry.address, key, error=str(e)))
                continue

            out(f"  StorageKey: {key} -> Value: {value}")
            results.append(StorageQueryResult(entry.address, key, value=value))

    out("=== Storage scan complete ===\n")
    return results
