from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..adapters.transition_checks import TRANSITION_CHECKS
from ..adapters.transition_checks.base import CheckResult
from ..domain import Transition
from ..errors import TransitionRejected

if TYPE_CHECKING:
    from ..settings import OracleSettings

logger = logging.getLogger(__name__)


def run_transition_checks(config: OracleSettings, transition: Transition) -> None:
    """Run every transition check for the register's rate model.

    Args:
        config: Oracle configuration
        transition: The proposed transition

    Raises:
        TransitionRejected: The error kind of the first failing check, carrying
            every failed result. Nothing is partially accepted.
    """
    checks = [check_cls(config) for check_cls in TRANSITION_CHECKS[transition.current.model]]
    logger.debug(
        "Running %d transition checks for %s", len(checks), transition.current.identifier
    )

    failures: list[CheckResult] = []
    for check in checks:
        try:
            result = check.run_check(transition)
        except Exception as e:
            logger.error(f"Check '{check.name}' raised exception: {e}")
            result = CheckResult(
                passed=False,
                message=f"{check.name}: {e}",
                error=e.__class__ if isinstance(e, TransitionRejected) else check.error,
            )

        if result.passed:
            logger.info(f"✓ {check.name}: {result.message}")
        else:
            logger.warning(f"✗ {check.name}: {result.message}")
            failures.append(result)

    if failures:
        error_cls = failures[0].error or TransitionRejected
        error_msg = f"Transition rejected: {'; '.join(f.message for f in failures)}"
        raise error_cls(error_msg, failures=failures)
