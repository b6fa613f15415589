from __future__ import annotations

from ...constants import BORROW_TOKEN_DENOMINATION
from ...domain import Transition
from ...errors import NonMonotonicValue
from .base import BaseTransitionCheck, CheckResult


class MonotonicValueCheck(BaseTransitionCheck):
    """Borrow token value never decreases and stays positive."""

    error = NonMonotonicValue

    @property
    def name(self) -> str:
        return "Monotonic Value Check"

    def run_check(self, transition: Transition) -> CheckResult:
        before = transition.current.borrow_token_value
        after = transition.successor.borrow_token_value

        if after <= 0:
            return self._failed(f"Borrow token value {after} is not positive")
        if after < before:
            return self._failed(f"Borrow token value decreases from {before} to {after}")
        return self._passed(f"Borrow token value {before} -> {after}")


class FixedValueCheck(BaseTransitionCheck):
    """Simple model registers keep the borrow token at par."""

    error = NonMonotonicValue

    @property
    def name(self) -> str:
        return "Fixed Value Check"

    def run_check(self, transition: Transition) -> CheckResult:
        for label, register in (
            ("current", transition.current),
            ("successor", transition.successor),
        ):
            if register.borrow_token_value != BORROW_TOKEN_DENOMINATION:
                return self._failed(
                    f"{label.capitalize()} borrow token value {register.borrow_token_value} "
                    f"must stay at {BORROW_TOKEN_DENOMINATION}"
                )
        return self._passed("Borrow token value fixed at par")
