import pytest
from hypothesis import given
from hypothesis import strategies as st

from storage_probe.request_builder import (
    build_access_list_params,
    build_call_object,
    to_hex_quantity,
)
from storage_probe.transactions import TransactionRecord

from conftest import SENDER, RECIPIENT, TX_HASH


def make_tx(**overrides):
    fields = dict(tx_hash=TX_HASH, sender="0xA", recipient="0xB", value=1000, data="0x")
    fields.update(overrides)
    return TransactionRecord(**fields)


def test_params_for_simple_transfer():
    params = build_access_list_params(make_tx())
    assert params == [{"from": "0xA", "to": "0xB", "value": "0x3e8", "data": "0x"}, "latest"]


def test_params_keep_field_order():
    call = build_call_object(make_tx())
    assert list(call) == ["from", "to", "value", "data"]


def test_absent_value_is_omitted():
    call = build_call_object(make_tx(value=None))
    assert "value" not in call
    assert None not in call.values()


def test_string_value_passes_through():
    call = build_call_object(make_tx(value="0xde0b6b3a7640000"))
    assert call["value"] == "0xde0b6b3a7640000"


def test_contract_creation_has_no_recipient():
    call = build_call_object(make_tx(recipient=None, data="0x6080"))
    assert "to" not in call
    assert call["data"] == "0x6080"


def test_custom_block_tag():
    params = build_access_list_params(make_tx(sender=SENDER, recipient=RECIPIENT), block="pending")
    assert params[1] == "pending"
    assert params[0]["from"] == SENDER


def test_zero_value_is_encoded():
    assert to_hex_quantity(0) == "0x0"


@pytest.mark.parametrize("bad", [True, 1.5, b"\x01"])
def test_unsupported_value_types(bad):
    with pytest.raises(TypeError):
        to_hex_quantity(bad)


def test_negative_value_rejected():
    with pytest.raises(ValueError):
        to_hex_quantity(-1)


@given(value=st.integers(min_value=0, max_value=2**256 - 1))
def test_integer_values_round_trip_through_hex(value):
    encoded = to_hex_quantity(value)
    assert encoded.startswith("0x")
    assert int(encoded, 16) == value
