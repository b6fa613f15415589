import pytest

from interest_oracle.constants import BORROW_TOKEN_DENOMINATION, MAX_UINT64
from interest_oracle.domain import RateModelKind, ValueRegister
from interest_oracle.encoder import decode_register, encode_register
from interest_oracle.errors import MalformedInput, OverflowRisk

POLICY = "0x" + "44" * 32


def make_register(**overrides):
    fields = {
        "identifier": "0x" + "ab" * 32,
        "access_policy": POLICY,
        "borrow_token_value": BORROW_TOKEN_DENOMINATION,
        "last_update_height": 1_000,
    }
    fields.update(overrides)
    return ValueRegister(**fields)


def test_layout_is_three_words():
    encoded = encode_register(make_register())

    assert len(encoded) == 96
    assert encoded[:32] == bytes.fromhex("ab" * 32)
    assert int.from_bytes(encoded[32:64], "big") == BORROW_TOKEN_DENOMINATION
    assert int.from_bytes(encoded[64:], "big") == 1_000


def test_simple_register_stores_rate_in_third_word():
    register = make_register(last_update_height=None, annual_rate=75_000)
    encoded = encode_register(register)

    assert int.from_bytes(encoded[64:], "big") == 75_000
    decoded = decode_register(encoded, RateModelKind.SIMPLE, access_policy=POLICY)
    assert decoded == register


def test_decode_restores_surrounding_fields():
    register = make_register(carried_value=42)
    decoded = decode_register(
        encode_register(register),
        RateModelKind.COMPOUND,
        access_policy=POLICY,
        carried_value=42,
    )
    assert decoded == register


def test_height_beyond_uint64():
    with pytest.raises(OverflowRisk):
        encode_register(make_register(last_update_height=MAX_UINT64 + 1))


def test_negative_value():
    with pytest.raises(OverflowRisk):
        encode_register(make_register(borrow_token_value=-1))


def test_truncated_layout():
    with pytest.raises(MalformedInput):
        decode_register(b"\x00" * 40, RateModelKind.COMPOUND, access_policy=POLICY)
