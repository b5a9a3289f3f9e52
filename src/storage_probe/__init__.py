"""
Access list storage inspector.

Given a transaction hash, asks the provider which storage slots the
transaction would touch (eth_createAccessList) and reads their current values.
"""

from .config import Settings
from .exceptions import (
    StorageProbeError,
    ConfigurationError,
    TransactionNotFoundError,
    RpcError,
    RpcTransportError,
    RpcResponseError,
)
from .transactions import TransactionRecord, fetch_transaction
from .request_builder import to_hex_quantity, build_access_list_params
from .rpc_client import AccessListClient, AccessListEntry, AccessListResponse, parse_access_list
from .storage_inspector import StorageQueryResult, inspect_storage
from .pipeline import InspectionReport, run_inspection


__all__ = [
    "Settings",
    # Errors
    "StorageProbeError",
    "ConfigurationError",
    "TransactionNotFoundError",
    "RpcError",
    "RpcTransportError",
    "RpcResponseError",
    # Pipeline stages
    "TransactionRecord",
    "fetch_transaction",
    "to_hex_quantity",
    "build_access_list_params",
    "AccessListClient",
    "AccessListEntry",
    "AccessListResponse",
    "parse_access_list",
    "StorageQueryResult",
    "inspect_storage",
    "InspectionReport",
    "run_inspection",
]
