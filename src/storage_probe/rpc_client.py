# storage_probe/rpc_client.py
"""
Raw JSON-RPC client for ``eth_createAccessList``.

web3.py does not wrap this method on every provider, so the request is posted
directly with requests and the response body is parsed here.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests
import structlog

from .exceptions import RpcResponseError, RpcTransportError

logger = structlog.get_logger()

CREATE_ACCESS_LIST_METHOD = "eth_createAccessList"
JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class AccessListEntry:
    address: str
    storage_keys: Tuple[str, ...] = ()

    @classmethod
    def from_json(cls, item: Dict[str, Any]) -> "AccessListEntry":
        keys = item.get("storageKeys")
        if not isinstance(keys, list):
            keys = []
        return cls(address=item.get("address"), storage_keys=tuple(keys))

    def to_json(self) -> Dict[str, Any]:
        return {"address": self.address, "storageKeys": list(self.storage_keys)}


@dataclass
class AccessListResponse:
    body: Dict[str, Any]
    access_list: List[AccessListEntry] = field(default_factory=list)
    gas_used: Optional[int] = None
    error: Optional[Dict[str, Any]] = None

    @property
    def is_empty(self) -> bool:
        return not self.access_list


def parse_access_list(body: Any) -> List[AccessListEntry]:
    """Extract ``result.accessList``; anything missing or malformed yields an empty list."""
    if not isinstance(body, dict):
        return []
    result = body.get("result")
    if not isinstance(result, dict):
        return []
    items = result.get("accessList")
    if not isinstance(items, list):
        return []
    return [AccessListEntry.from_json(item) for item in items if isinstance(item, dict)]


def _parse_gas_used(body: Dict[str, Any]) -> Optional[int]:
    result = body.get("result")
    if not isinstance(result, dict):
        return None
    gas_used = result.get("gasUsed")
    if isinstance(gas_used, str):
        try:
            return int(gas_used, 16)
        except ValueError:
            return None
    if isinstance(gas_used, int):
        return gas_used
    return None


class AccessListClient:
    """Posts eth_createAccessList requests to a JSON-RPC endpoint."""

    def __init__(
        self,
        rpc_url: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        request_id: int = 1,
        echo: Callable[[str], None] = print,
    ):
        self.rpc_url = rpc_url
        self.session = session or requests.Session()
        self.timeout = timeout
        self.request_id = request_id
        self.echo = echo

    def build_payload(self, params: List[Any]) -> Dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "method": CREATE_ACCESS_LIST_METHOD,
            "params": params,
            "id": self.request_id,
        }

    def create_access_list(self, params: List[Any]) -> AccessListResponse:
        """
        Send eth_createAccessList and parse the access list from the response.

        Args:
            params: ``[call_object, block]`` as built by the request builder

        Returns:
            The parsed response. A JSON-RPC error object or a missing access list
            is not raised; it yields an empty ``access_list``.

        Raises:
            RpcTransportError: If the HTTP request fails
            RpcResponseError: If the response body is not JSON
        """
        payload = self.build_payload(params)
        self.echo(f"{CREATE_ACCESS_LIST_METHOD} request:")
        self.echo(json.dumps(payload, indent=2))

        logger.debug("Posting JSON-RPC request", method=CREATE_ACCESS_LIST_METHOD, url=self.rpc_url)
        try:
            response = self.session.post(
                self.rpc_url,
                data=json.dumps(payload),
                headers=JSON_HEADERS,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RpcTransportError(f"{CREATE_ACCESS_LIST_METHOD} request failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise RpcResponseError(
                f"Non-JSON response from {CREATE_ACCESS_LIST_METHOD} (HTTP {response.status_code}): {e}"
            ) from e

        self.echo("Access list response:")
        self.echo(json.dumps(body, indent=2))

        error = body.get("error") if isinstance(body, dict) else None
        if error:
            logger.warning("JSON-RPC error returned", method=CREATE_ACCESS_LIST_METHOD, error=error)

        return AccessListResponse(
            body=body,
            access_list=parse_access_list(body),
            gas_used=_parse_gas_used(body) if isinstance(body, dict) else None,
            error=error,
        )
