from __future__ import annotations

from ...domain import Transition
from ...errors import UnauthorizedRateChange
from .base import BaseTransitionCheck, CheckResult


class AuthorizationCheckAdapter(BaseTransitionCheck):
    """Rate change approved by the injected governance capability."""

    error = UnauthorizedRateChange

    @property
    def name(self) -> str:
        return "Governance Authorization Check"

    def run_check(self, transition: Transition) -> CheckResult:
        if transition.authorization is None:
            return self._failed("No governance authorization configured")

        rate_change = transition.context.rate_change
        if rate_change is None:
            return self._failed("No rate change requested")

        if not transition.authorization.is_authorized(
            transition.current,
            rate_change,
            transition.context.current_height,
            transition.version,
        ):
            return self._failed(
                f"Rate change to {rate_change.new_rate} is not authorized "
                f"({len(rate_change.signatures)} signature(s) supplied)"
            )
        return self._passed(f"Rate change to {rate_change.new_rate} authorized")
