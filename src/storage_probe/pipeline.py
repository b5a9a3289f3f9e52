# storage_probe/pipeline.py
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

import structlog
from web3 import Web3

from .request_builder import DEFAULT_BLOCK, build_access_list_params
from .rpc_client import AccessListClient, AccessListEntry
from .storage_inspector import StorageQueryResult, inspect_storage
from .transactions import fetch_transaction

logger = structlog.get_logger()


@dataclass
class InspectionReport:
    tx_hash: str
    params: List[Any]
    access_list: List[AccessListEntry] = field(default_factory=list)
    results: List[StorageQueryResult] = field(default_factory=list)
    gas_used: Optional[int] = None

    @property
    def failed_reads(self) -> List[StorageQueryResult]:
        return [r for r in self.results if not r.ok]


def run_inspection(
    web3: Web3,
    client: AccessListClient,
    tx_hash: str,
    out: Callable[[str], None] = print,
    block: str = DEFAULT_BLOCK,
) -> InspectionReport:
    """
    Fetch a transaction, ask the provider for its access list and read every
    listed storage slot.

    Errors from the fetch and the access list call propagate; per-slot read
    errors are contained in the returned report.
    """
    tx = fetch_transaction(web3, tx_hash)
    params = build_access_list_params(tx, block)

    response = client.create_access_list(params)
    report = InspectionReport(
        tx_hash=tx_hash,
        params=params,
        access_list=response.access_list,
        gas_used=response.gas_used,
    )
    if response.gas_used is not None:
        out(f"Estimated gas with access list: {response.gas_used}")

    if response.is_empty:
        logger.info("Access list is empty or malformed", tx_hash=tx_hash)
        out("Access list is empty or malformed.")
        return report

    report.results = inspect_storage(web3, response.access_list, out=out, block=block)
    logger.info(
        "Inspection complete",
        tx_hash=tx_hash,
        addresses=len(report.access_list),
        reads=len(report.results),
        failed=len(report.failed_reads),
    )
    return report
