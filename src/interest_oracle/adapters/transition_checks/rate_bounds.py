from __future__ import annotations

from ...constants import RATE_DENOMINATION
from ...domain import Transition
from ...errors import InvalidRate
from .base import BaseTransitionCheck, CheckResult


class RateBoundsCheck(BaseTransitionCheck):
    """Annual rate within 0% to 100% and equal to the requested rate."""

    error = InvalidRate

    @property
    def name(self) -> str:
        return "Rate Bounds Check"

    def run_check(self, transition: Transition) -> CheckResult:
        rate = transition.successor.annual_rate
        if rate is None:
            return self._failed("Simple registers must carry an annual rate")
        if not 0 <= rate <= RATE_DENOMINATION:
            return self._failed(
                f"Annual rate {rate} outside [0, {RATE_DENOMINATION}]"
            )

        requested = transition.context.rate_change
        if requested is None or requested.new_rate != rate:
            return self._failed(
                f"Annual rate {rate} was not requested by governance"
            )
        return self._passed(f"Annual rate {rate} within bounds")
