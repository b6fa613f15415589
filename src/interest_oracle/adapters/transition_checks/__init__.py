"""Transition check registry, in evaluation order per rate model."""

from __future__ import annotations

from ...domain import RateModelKind
from .accrual import AccrualMatchCheck
from .authorization import AuthorizationCheckAdapter
from .base import BaseTransitionCheck, CheckResult
from .execution_fee import ExecutionFeeCheck
from .identity import IdentityCheck
from .monotonic_value import FixedValueCheck, MonotonicValueCheck
from .rate_bounds import RateBoundsCheck
from .reference_inputs import ReferenceInputCheck
from .timing import TimingCheck

TRANSITION_CHECKS: dict[RateModelKind, list[type[BaseTransitionCheck]]] = {
    RateModelKind.COMPOUND: [
        IdentityCheck,
        ReferenceInputCheck,
        TimingCheck,
        ExecutionFeeCheck,
        MonotonicValueCheck,
        AccrualMatchCheck,
    ],
    RateModelKind.SIMPLE: [
        IdentityCheck,
        ExecutionFeeCheck,
        FixedValueCheck,
        RateBoundsCheck,
        AuthorizationCheckAdapter,
    ],
}

__all__ = [
    "BaseTransitionCheck",
    "CheckResult",
    "TRANSITION_CHECKS",
]
