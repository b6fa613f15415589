from __future__ import annotations

import logging

from ...constants import UPDATE_FREQUENCY
from ...domain import Transition
from ...errors import StaleUpdate
from .base import BaseTransitionCheck, CheckResult

logger = logging.getLogger(__name__)


class TimingCheck(BaseTransitionCheck):
    """Update window has arrived and the successor advances exactly one period."""

    error = StaleUpdate

    @property
    def name(self) -> str:
        return "Update Window Check"

    def run_check(self, transition: Transition) -> CheckResult:
        recorded = transition.current.last_update_height
        final = transition.successor.last_update_height
        current_height = transition.context.current_height
        frequency = UPDATE_FREQUENCY

        if recorded is None or final is None:
            return self._failed("Compound registers must record an update height")

        if current_height < recorded:
            return self._failed(
                f"Update window not reached: height {current_height} < recorded {recorded} "
                f"({recorded - current_height} blocks remaining)"
            )

        if final != recorded + frequency:
            return self._failed(
                f"Successor height {final} must equal {recorded} + {frequency}"
            )

        return self._passed(f"Update window open at height {current_height}")
