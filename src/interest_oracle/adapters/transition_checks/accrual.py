from __future__ import annotations

from ...domain import Transition
from ...errors import InvalidAccrual
from .base import BaseTransitionCheck, CheckResult


class AccrualMatchCheck(BaseTransitionCheck):
    """Successor value must equal the value the rate model computes."""

    error = InvalidAccrual

    @property
    def name(self) -> str:
        return "Accrual Match Check"

    def run_check(self, transition: Transition) -> CheckResult:
        expected = transition.expected
        if expected is None:
            return self._failed("No recomputed successor available")

        proposed = transition.successor.borrow_token_value
        if proposed != expected.borrow_token_value:
            return self._failed(
                f"Proposed borrow token value {proposed} does not match accrued value "
                f"{expected.borrow_token_value}"
            )
        return self._passed(f"Borrow token value matches accrual ({proposed})")
