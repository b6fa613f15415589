from __future__ import annotations

import logging

from ...domain import Transition
from ...errors import InvalidIdentifier
from .base import BaseTransitionCheck, CheckResult

logger = logging.getLogger(__name__)


class ReferenceInputCheck(BaseTransitionCheck):
    """Pool and parameter records must carry their expected token ids."""

    error = InvalidIdentifier

    @property
    def name(self) -> str:
        return "Reference Input Check"

    def run_check(self, transition: Transition) -> CheckResult:
        context = transition.context
        if context.pool is None or context.parameters is None:
            return self._failed("Pool snapshot and parameter record are both required")

        expected = {
            "pool": (self.config.pool_nft_id_required, context.pool.identifier),
            "parameter": (
                self.config.parameter_nft_id_required,
                context.parameters.identifier,
            ),
        }
        mismatched = []
        for label, (want, got) in expected.items():
            logger.debug(f" {label} reference: expected={want} actual={got}")
            if want.lower() != got.lower():
                mismatched.append(f"{label} record {got} (expected {want})")

        if mismatched:
            return self._failed(
                f"Unauthenticated reference input(s): {', '.join(mismatched)}"
            )
        return self._passed("Reference inputs carry the expected identifiers")
