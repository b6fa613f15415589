"""Encoder for the persisted register layout."""

from __future__ import annotations

import logging

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError

from .domain import RateModelKind, ValueRegister
from .errors import MalformedInput, OverflowRisk

logger = logging.getLogger(__name__)

# (identifier, borrowTokenValue, lastUpdateHeight | annualRate)
REGISTER_LAYOUT = ["bytes32", "uint256", "uint64"]


def encode_register(register: ValueRegister) -> bytes:
    """Encode a register into its persisted layout.

    Raises:
        OverflowRisk: If a field does not fit its layout width
    """
    if register.model is RateModelKind.COMPOUND:
        third = register.last_update_height_required
    else:
        third = register.annual_rate_required

    try:
        return encode(
            REGISTER_LAYOUT,
            [
                bytes.fromhex(register.identifier.removeprefix("0x")),
                register.borrow_token_value,
                third,
            ],
        )
    except EncodingError as e:
        raise OverflowRisk(f"Register does not fit persisted layout: {e}") from e


def decode_register(
    data: bytes,
    model: RateModelKind,
    access_policy: str,
    carried_value: int = 0,
) -> ValueRegister:
    """Decode a persisted layout back into a register.

    The layout does not hold the access policy or carried value; the caller
    supplies them from the surrounding record.
    """
    try:
        identifier, value, third = decode(REGISTER_LAYOUT, data)
    except DecodingError as e:
        raise MalformedInput(f"Cannot decode register layout: {e}") from e

    fields: dict[str, int] = (
        {"last_update_height": third}
        if model is RateModelKind.COMPOUND
        else {"annual_rate": third}
    )
    return ValueRegister(
        identifier="0x" + identifier.hex(),
        access_policy=access_policy,
        borrow_token_value=value,
        carried_value=carried_value,
        **fields,
    )
