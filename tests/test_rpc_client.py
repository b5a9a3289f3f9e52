import json

import pytest
import requests
from unittest.mock import MagicMock

from storage_probe.exceptions import RpcResponseError, RpcTransportError
from storage_probe.rpc_client import AccessListClient, AccessListEntry, parse_access_list

from conftest import CONTRACT_A, CONTRACT_B, KEY_1, KEY_2, SENDER

RPC_URL = "https://eth-sepolia.g.alchemy.com/v2/test-key"
PARAMS = [{"from": SENDER, "to": CONTRACT_A, "value": "0x0", "data": "0x"}, "latest"]

ACCESS_LIST_RESPONSE = {
    "jsonrpc": "2.0",
    "id": 1,
    "result": {
        "accessList": [
            {"address": CONTRACT_A, "storageKeys": [KEY_1, KEY_2]},
            {"address": CONTRACT_B, "storageKeys": []},
        ],
        "gasUsed": "0x5208",
    },
}


def make_client(body=None, json_error=None, post_error=None):
    session = MagicMock()
    response = MagicMock(status_code=200)
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    if post_error is not None:
        session.post.side_effect = post_error
    else:
        session.post.return_value = response
    echoed = []
    client = AccessListClient(RPC_URL, session=session, echo=echoed.append)
    return client, session, echoed


def test_payload_envelope():
    client, _, _ = make_client()
    assert client.build_payload(PARAMS) == {
        "jsonrpc": "2.0",
        "method": "eth_createAccessList",
        "params": PARAMS,
        "id": 1,
    }


def test_create_access_list_posts_json():
    client, session, _ = make_client(body=ACCESS_LIST_RESPONSE)

    client.create_access_list(PARAMS)

    session.post.assert_called_once()
    args, kwargs = session.post.call_args
    assert args[0] == RPC_URL
    assert kwargs["headers"] == {"Content-Type": "application/json"}
    assert kwargs["timeout"] is None
    sent = json.loads(kwargs["data"])
    assert sent["method"] == "eth_createAccessList"
    assert sent["params"] == PARAMS


def test_create_access_list_parses_entries():
    client, _, echoed = make_client(body=ACCESS_LIST_RESPONSE)

    response = client.create_access_list(PARAMS)

    assert response.access_list == [
        AccessListEntry(CONTRACT_A, (KEY_1, KEY_2)),
        AccessListEntry(CONTRACT_B, ()),
    ]
    assert response.gas_used == 21000
    assert not response.is_empty
    # request and response are both dumped
    assert echoed[0] == "eth_createAccessList request:"
    assert json.loads(echoed[1])["method"] == "eth_createAccessList"
    assert json.loads(echoed[3]) == ACCESS_LIST_RESPONSE


def test_json_rpc_error_is_not_raised():
    body = {"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "execution reverted"}}
    client, _, _ = make_client(body=body)

    response = client.create_access_list(PARAMS)

    assert response.is_empty
    assert response.error == body["error"]


def test_non_json_response_raises():
    client, _, _ = make_client(json_error=ValueError("Expecting value"))

    with pytest.raises(RpcResponseError, match="Non-JSON response"):
        client.create_access_list(PARAMS)


def test_network_failure_raises():
    client, _, _ = make_client(post_error=requests.ConnectionError("connection refused"))

    with pytest.raises(RpcTransportError):
        client.create_access_list(PARAMS)


@pytest.mark.parametrize("body", [
    {"result": {"accessList": []}},
    {"result": {}},
    {"result": None},
    {"result": {"accessList": "oops"}},
    [],
    None,
])
def test_parse_access_list_tolerates_malformed_bodies(body):
    assert parse_access_list(body) == []


def test_entry_without_storage_keys_field():
    entries = parse_access_list({"result": {"accessList": [{"address": CONTRACT_A}]}})
    assert entries == [AccessListEntry(CONTRACT_A, ())]
    assert entries[0].to_json() == {"address": CONTRACT_A, "storageKeys": []}
