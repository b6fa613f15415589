"""Errors raised while validating or applying register transitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .adapters.transition_checks.base import CheckResult


class InterestOracleError(Exception):
    """Base error class for the interest oracle."""


class TransitionRejected(InterestOracleError):
    """Raised when a proposed transition must not be committed.

    ``failures`` holds every failed check when the rejection comes from the
    validator; it is empty for errors raised directly during computation.
    """

    def __init__(self, message: str, failures: list[CheckResult] | None = None):
        super().__init__(message)
        self.failures = failures or []


class InvalidIdentifier(TransitionRejected):
    """Register or reference input carries an unexpected identifier."""


class StaleUpdate(TransitionRejected):
    """Height window for the update has not arrived or is not advanced by one period."""


class NonMonotonicValue(TransitionRejected):
    """Successor borrow token value is lower than the current value."""


class InvalidAccrual(TransitionRejected):
    """Successor borrow token value does not match the accrued value."""


class OverflowRisk(TransitionRejected):
    """Intermediate arithmetic would leave the representable range."""


class UnauthorizedRateChange(TransitionRejected):
    """Governance authorization for a rate change is missing or invalid."""


class InvalidRate(TransitionRejected):
    """Annual rate outside of the allowed bounds."""


class InvalidDuration(TransitionRejected):
    """Loan origination height lies in the future."""


class ExcessiveExecutionFee(TransitionRejected):
    """Carried value shrank by more than the maximum execution fee."""


class MalformedInput(TransitionRejected):
    """Reference data is structurally invalid (negative amounts, wrong arity)."""


class VersionConflict(TransitionRejected):
    """The register moved on since the caller read it."""


class UnknownRegister(InterestOracleError):
    """No live register exists for the requested identifier."""
