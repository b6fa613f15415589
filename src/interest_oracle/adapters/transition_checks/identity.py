from __future__ import annotations

from ...domain import Transition
from ...errors import InvalidIdentifier
from .base import BaseTransitionCheck, CheckResult


class IdentityCheck(BaseTransitionCheck):
    """Successor keeps the interest token id and the governing policy.

    The current register must also be governed by the deployment's
    configured access policy.
    """

    error = InvalidIdentifier

    @property
    def name(self) -> str:
        return "Identity Check"

    def run_check(self, transition: Transition) -> CheckResult:
        current, successor = transition.current, transition.successor
        policy = self.config.access_policy
        if policy is None:
            return self._failed("No access policy configured for this deployment")

        if current.access_policy.lower() != policy.lower():
            return self._failed(
                f"Register access policy {current.access_policy} is not the configured policy {policy}"
            )
        if successor.identifier.lower() != current.identifier.lower():
            return self._failed(
                f"Successor identifier {successor.identifier} differs from {current.identifier}"
            )
        if successor.access_policy.lower() != current.access_policy.lower():
            return self._failed(
                f"Successor access policy {successor.access_policy} differs from {current.access_policy}"
            )
        if successor.model != current.model:
            return self._failed(
                f"Successor switches rate model from {current.model.value} to {successor.model.value}"
            )
        return self._passed("Identifier and access policy preserved")
