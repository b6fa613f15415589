"""Domain models for the interest oracle."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..authorization import AuthorizationCheck


class RateModelKind(str, Enum):
    COMPOUND = "compound"
    SIMPLE = "simple"


@dataclass(frozen=True)
class ValueRegister:
    """The oracle's persisted state, bound to a single interest token id.

    Exactly one of ``last_update_height`` (compound model) or ``annual_rate``
    (simple model) is set.
    """

    identifier: str
    access_policy: str
    borrow_token_value: int
    carried_value: int = 0
    last_update_height: int | None = None
    annual_rate: int | None = None

    def __post_init__(self) -> None:
        if (self.last_update_height is None) == (self.annual_rate is None):
            raise ValueError(
                "ValueRegister needs exactly one of last_update_height or annual_rate"
            )

    @property
    def model(self) -> RateModelKind:
        if self.last_update_height is not None:
            return RateModelKind.COMPOUND
        return RateModelKind.SIMPLE

    @property
    def last_update_height_required(self) -> int:
        if self.last_update_height is None:
            raise ValueError("last_update_height is only set on compound registers")
        return self.last_update_height

    @property
    def annual_rate_required(self) -> int:
        if self.annual_rate is None:
            raise ValueError("annual_rate is only set on simple registers")
        return self.annual_rate

    def evolve(self, **changes: object) -> "ValueRegister":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)  # type: ignore[arg-type]


@dataclass(frozen=True)
class CoefficientRecord:
    """Governance parameter record holding the polynomial coefficients."""

    identifier: str
    coefficients: tuple[int, ...]


@dataclass(frozen=True)
class PoolSnapshot:
    """Lending pool figures read as a reference input."""

    identifier: str
    pool_assets: int
    borrow_tokens_circulating: int


@dataclass(frozen=True)
class RateChange:
    """Governance request to change the simple model's annual rate."""

    new_rate: int
    signatures: tuple[str, ...] = ()


@dataclass(frozen=True)
class TransitionContext:
    """Everything a transition may consult besides the register itself."""

    current_height: int
    pool: PoolSnapshot | None = None
    parameters: CoefficientRecord | None = None
    rate_change: RateChange | None = None
    execution_fee: int = 0

    @property
    def pool_required(self) -> PoolSnapshot:
        if self.pool is None:
            raise ValueError("pool snapshot is required for compound accrual")
        return self.pool

    @property
    def parameters_required(self) -> CoefficientRecord:
        if self.parameters is None:
            raise ValueError("parameter record is required for compound accrual")
        return self.parameters

    @property
    def rate_change_required(self) -> RateChange:
        if self.rate_change is None:
            raise ValueError("rate change is required for simple model transitions")
        return self.rate_change


@dataclass(frozen=True)
class Transition:
    """A proposed successor together with what validators need to judge it."""

    current: ValueRegister
    successor: ValueRegister
    context: TransitionContext
    expected: ValueRegister | None = None
    version: int = 0
    authorization: AuthorizationCheck | None = field(default=None, compare=False)
