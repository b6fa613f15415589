"""Governance authorization for simple model rate changes.

The transition engine only needs an ``AuthorizationCheck``; the concrete
scheme here is an m-of-n set of EIP-191 signers.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from eth_account import Account
from eth_account.messages import SignableMessage, encode_defunct
from web3 import Web3

from .constants import MAX_UINT64
from .domain import RateChange, ValueRegister

logger = logging.getLogger(__name__)


class AuthorizationCheck(Protocol):
    def is_authorized(
        self,
        register: ValueRegister,
        rate_change: RateChange,
        current_height: int,
        version: int,
    ) -> bool: ...


def rate_change_message(
    register: ValueRegister, new_rate: int, current_height: int, version: int
) -> SignableMessage:
    """Message governance signs to move ``register`` to ``new_rate``.

    Binds the register id, its current rate, the height and the store version
    the change is built against. Every commit bumps the version, so a
    signature is spent once it has been used or the register has moved on.
    """
    digest = Web3.solidity_keccak(
        ["bytes32", "uint64", "uint64", "uint64", "uint64"],
        [
            bytes.fromhex(register.identifier.removeprefix("0x")),
            register.annual_rate_required,
            new_rate,
            current_height,
            version,
        ],
    )
    return encode_defunct(primitive=bytes(digest))


def sign_rate_change(
    private_key: str,
    register: ValueRegister,
    new_rate: int,
    current_height: int,
    version: int,
) -> str:
    """Sign a rate change and return the 0x-prefixed signature."""
    message = rate_change_message(register, new_rate, current_height, version)
    signed = Account.sign_message(message, private_key=private_key)
    return "0x" + bytes(signed.signature).hex()


class SignatureAuthorization:
    """Require ``threshold`` distinct governance signers to approve a change."""

    def __init__(self, signers: Sequence[str], threshold: int = 1):
        if threshold < 1:
            raise ValueError("threshold must be at least 1")
        if threshold > len(signers):
            raise ValueError(
                f"threshold {threshold} exceeds number of signers {len(signers)}"
            )
        self.signers = {Web3.to_checksum_address(s) for s in signers}
        self.threshold = threshold

    def is_authorized(
        self,
        register: ValueRegister,
        rate_change: RateChange,
        current_height: int,
        version: int,
    ) -> bool:
        if not 0 <= rate_change.new_rate <= MAX_UINT64:
            return False

        message = rate_change_message(
            register, rate_change.new_rate, current_height, version
        )
        approvals: set[str] = set()
        for signature in rate_change.signatures:
            try:
                signer = Account.recover_message(message, signature=signature)
            except Exception as e:
                logger.debug(f"Discarding unreadable signature {signature!r}: {e}")
                continue
            if signer in self.signers:
                approvals.add(signer)
            else:
                logger.warning(f"Signature from non-governance address {signer}")

        logger.debug(f"Rate change approvals: {len(approvals)}/{self.threshold}")
        return len(approvals) >= self.threshold
