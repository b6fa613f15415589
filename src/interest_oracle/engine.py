"""Accrual engine: builds, validates and commits register transitions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .checks.transition_checks import run_transition_checks
from .constants import UPDATE_FREQUENCY
from .domain import (
    CoefficientRecord,
    PoolSnapshot,
    RateChange,
    Transition,
    TransitionContext,
    ValueRegister,
)
from .errors import InvalidIdentifier, MalformedInput
from .rate_models import BaseRateModel, get_rate_model
from .store import RegisterStore

if TYPE_CHECKING:
    from .authorization import AuthorizationCheck
    from .settings import OracleSettings

logger = logging.getLogger(__name__)


class AccrualEngine:
    """Drives transitions of one interest register.

    The engine never writes the register directly: a successor is committed
    to the store only after every transition check passed, otherwise the
    live register is left exactly as it was.
    """

    def __init__(
        self,
        config: OracleSettings,
        store: RegisterStore,
        rate_model: BaseRateModel | None = None,
        authorization: AuthorizationCheck | None = None,
    ):
        self.config = config
        self.store = store
        self.rate_model = rate_model or get_rate_model(config)
        self.authorization = authorization
        self.identifier = config.interest_nft_id_required

    @property
    def current(self) -> ValueRegister:
        return self.store.read(self.identifier)

    @property
    def version(self) -> int:
        return self.store.version(self.identifier)

    def periods_behind(self, current_height: int) -> int:
        """Whole update periods that are due at ``current_height``."""
        recorded = self.current.last_update_height
        if recorded is None or current_height < recorded:
            return 0
        return (current_height - recorded) // UPDATE_FREQUENCY + 1

    def build_successor(self, context: TransitionContext) -> ValueRegister:
        """Compute the candidate successor of the live register."""
        current = self.current
        if current.model is not self.rate_model.kind:
            raise InvalidIdentifier(
                f"Register {current.identifier} is a {current.model.value} register, "
                f"engine runs the {self.rate_model.name}"
            )
        try:
            return self.rate_model.compute_update(current, context)
        except ValueError as e:
            raise MalformedInput(str(e)) from e

    def submit(
        self,
        successor: ValueRegister,
        context: TransitionContext,
        expected_version: int,
    ) -> ValueRegister:
        """Validate a proposed successor and commit it atomically.

        Args:
            successor: Proposed next register state
            context: Height and reference inputs of the transition
            expected_version: Store version the proposal was built against

        Returns:
            The committed register

        Raises:
            TransitionRejected: If any check fails or the version moved on
        """
        current = self.current
        expected = self.build_successor(context)
        transition = Transition(
            current=current,
            successor=successor,
            context=context,
            expected=expected,
            version=expected_version,
            authorization=self.authorization,
        )

        run_transition_checks(self.config, transition)
        version = self.store.commit(successor, expected_version)

        logger.info(
            "Committed %s v%d: value %d -> %d",
            successor.identifier,
            version,
            current.borrow_token_value,
            successor.borrow_token_value,
        )
        return successor

    def accrue(
        self,
        current_height: int,
        pool: PoolSnapshot,
        parameters: CoefficientRecord,
        expected_version: int | None = None,
        execution_fee: int = 0,
    ) -> ValueRegister:
        """Advance a compound register by one period."""
        if expected_version is None:
            expected_version = self.version

        behind = self.periods_behind(current_height)
        if behind > 1:
            logger.warning(
                "Register %s is %d periods behind at height %d; one period is accrued per transition",
                self.identifier,
                behind,
                current_height,
            )

        context = TransitionContext(
            current_height=current_height,
            pool=pool,
            parameters=parameters,
            execution_fee=execution_fee,
        )
        successor = self.build_successor(context)
        return self.submit(successor, context, expected_version)

    def change_rate(
        self,
        rate_change: RateChange,
        current_height: int,
        expected_version: int | None = None,
        execution_fee: int = 0,
    ) -> ValueRegister:
        """Set a new annual rate on a simple register."""
        if expected_version is None:
            expected_version = self.version

        context = TransitionContext(
            current_height=current_height,
            rate_change=rate_change,
            execution_fee=execution_fee,
        )
        successor = self.build_successor(context)
        return self.submit(successor, context, expected_version)
