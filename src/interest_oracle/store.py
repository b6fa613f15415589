"""Single-instance register arena and the read-only consumer view."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from .domain import RateModelKind, ValueRegister
from .encoder import decode_register, encode_register
from .constants import RATE_DENOMINATION
from .errors import InvalidRate, MalformedInput, UnknownRegister, VersionConflict
from .units import to_borrow_token_amount, to_debt_amount

logger = logging.getLogger(__name__)


class RegisterStore:
    """Holds the one live register per interest token id.

    Every commit names the version it was built against; a commit against a
    version that has moved on is refused, so at most one successor is ever
    accepted per predecessor.
    """

    def __init__(self) -> None:
        self._registers: dict[str, ValueRegister] = {}
        self._versions: dict[str, int] = {}

    @staticmethod
    def _key(identifier: str) -> str:
        return identifier.lower()

    def __contains__(self, identifier: str) -> bool:
        return self._key(identifier) in self._registers

    @staticmethod
    def _validate(register: ValueRegister) -> None:
        if register.borrow_token_value <= 0:
            raise MalformedInput(
                f"Register {register.identifier} has non-positive borrow token value "
                f"{register.borrow_token_value}"
            )
        rate = register.annual_rate
        if rate is not None and not 0 <= rate <= RATE_DENOMINATION:
            raise InvalidRate(
                f"Register {register.identifier} has annual rate {rate} outside "
                f"[0, {RATE_DENOMINATION}]"
            )

    def register(self, register: ValueRegister, version: int = 0) -> None:
        """Place an existing register into the arena.

        Raises:
            ValueError: If a live register already holds this identifier
            MalformedInput: If the borrow token value is not positive
            InvalidRate: If a simple register's rate is outside [0, RATE_DENOMINATION]
        """
        key = self._key(register.identifier)
        if key in self._registers:
            raise ValueError(f"Register {register.identifier} is already live")
        self._validate(register)
        encode_register(register)
        self._registers[key] = register
        self._versions[key] = version

    def read(self, identifier: str) -> ValueRegister:
        key = self._key(identifier)
        if key not in self._registers:
            raise UnknownRegister(f"No live register for {identifier}")
        return self._registers[key]

    def version(self, identifier: str) -> int:
        self.read(identifier)
        return self._versions[self._key(identifier)]

    def commit(self, successor: ValueRegister, expected_version: int) -> int:
        """Replace the live register with ``successor``.

        Returns:
            The new version

        Raises:
            VersionConflict: If the live version is not ``expected_version``
            OverflowRisk: If the successor does not fit the persisted layout
        """
        current_version = self.version(successor.identifier)
        if current_version != expected_version:
            raise VersionConflict(
                f"Register {successor.identifier} is at version {current_version}, "
                f"transition was built against {expected_version}"
            )
        encode_register(successor)

        key = self._key(successor.identifier)
        self._registers[key] = successor
        self._versions[key] = current_version + 1
        logger.debug(
            "Committed %s at version %d", successor.identifier, current_version + 1
        )
        return current_version + 1

    def to_dict(self) -> dict[str, Any]:
        records = []
        for key, register in self._registers.items():
            record = asdict(register)
            record["model"] = register.model.value
            record["version"] = self._versions[key]
            record["encoded"] = "0x" + encode_register(register).hex()
            records.append(record)
        return {"registers": records}

    def save(self, path: Path) -> None:
        path.write_text(json.dumps(self.to_dict(), indent=2))
        logger.debug("Saved %d register(s) to %s", len(self._registers), path)

    @classmethod
    def load(cls, path: Path) -> "RegisterStore":
        """Load a store written by ``save``.

        Raises:
            MalformedInput: If the file is not a register document or a record
                disagrees with its encoded layout
        """
        store = cls()
        try:
            data = json.loads(path.read_text())
            records = list(data.get("registers", []))
        except (json.JSONDecodeError, AttributeError, TypeError) as e:
            raise MalformedInput(f"State file {path} is not a register document: {e}") from e

        for record in records:
            try:
                version = int(record.pop("version", 0))
                encoded = record.pop("encoded", None)
                model = RateModelKind(record.pop("model"))
                register = ValueRegister(**record)
                layout = None if encoded is None else bytes.fromhex(encoded.removeprefix("0x"))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise MalformedInput(f"Malformed register record in {path}: {e!r}") from e

            if register.model is not model:
                raise MalformedInput(
                    f"Record {register.identifier} is labelled {model.value} but holds "
                    f"{register.model.value} fields"
                )
            if layout is not None:
                decoded = decode_register(
                    layout,
                    model,
                    access_policy=register.access_policy,
                    carried_value=register.carried_value,
                )
                if decoded != register.evolve(identifier=register.identifier.lower()):
                    raise MalformedInput(
                        f"Stored layout of {register.identifier} disagrees with its fields"
                    )
            if register.identifier in store:
                raise MalformedInput(f"Register {register.identifier} appears twice in {path}")
            store.register(register, version=version)
        logger.debug("Loaded %d register(s) from %s", len(store._registers), path)
        return store


class InterestReader:
    """Read-only view of the live register used by Pool and Collateral.

    Each access reads the arena afresh, so consumers always see the last
    committed state and never a rejected candidate.
    """

    def __init__(self, store: RegisterStore, identifier: str):
        self._store = store
        self._identifier = identifier

    @property
    def register(self) -> ValueRegister:
        return self._store.read(self._identifier)

    @property
    def borrow_token_value(self) -> int:
        return self.register.borrow_token_value

    @property
    def last_update_height(self) -> int | None:
        return self.register.last_update_height

    def debt_for(self, borrow_token_amount: int) -> int:
        return to_debt_amount(borrow_token_amount, self.borrow_token_value)

    def borrow_tokens_for(self, currency_amount: int) -> int:
        return to_borrow_token_amount(currency_amount, self.borrow_token_value)
