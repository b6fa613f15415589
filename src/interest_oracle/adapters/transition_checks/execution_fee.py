from __future__ import annotations

from ...domain import Transition
from ...errors import ExcessiveExecutionFee
from .base import BaseTransitionCheck, CheckResult


class ExecutionFeeCheck(BaseTransitionCheck):
    """Carried value may only pay for execution, up to the configured maximum."""

    error = ExcessiveExecutionFee

    @property
    def name(self) -> str:
        return "Execution Fee Check"

    def run_check(self, transition: Transition) -> CheckResult:
        previous = transition.current.carried_value
        remaining = transition.successor.carried_value
        maximum = self.config.maximum_execution_fee

        if remaining < 0:
            return self._failed(f"Successor carried value {remaining} is negative")
        if remaining < previous - maximum:
            return self._failed(
                f"Execution fee {previous - remaining} exceeds maximum {maximum}"
            )
        return self._passed(f"Execution fee {max(previous - remaining, 0)} within {maximum}")
