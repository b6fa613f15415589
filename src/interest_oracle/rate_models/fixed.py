from __future__ import annotations

import logging

from ..constants import BLOCKS_PER_YEAR, BORROW_TOKEN_DENOMINATION, RATE_DENOMINATION
from ..domain import RateModelKind, TransitionContext, ValueRegister
from ..errors import InvalidDuration, MalformedInput
from ..units import checked_add, checked_mul
from .base import BaseRateModel

logger = logging.getLogger(__name__)


class FixedRateModel(BaseRateModel):
    """Simple per-loan interest at a governance-set annual rate.

    The borrow token value stays at par; debt is computed per loan from the
    blocks elapsed since origination.
    """

    @property
    def kind(self) -> RateModelKind:
        return RateModelKind.SIMPLE

    @property
    def name(self) -> str:
        return "Fixed Rate Model"

    def compute_duration_interest(
        self, principal: int, annual_rate: int, duration_blocks: int
    ) -> int:
        """Interest owed on ``principal`` after ``duration_blocks``, truncated.

        Raises:
            InvalidDuration: If ``duration_blocks`` is negative
        """
        if duration_blocks < 0:
            raise InvalidDuration(f"Loan duration {duration_blocks} is negative")
        if principal < 0 or annual_rate < 0:
            raise MalformedInput("principal and annual_rate must be non-negative")

        numerator = checked_mul(checked_mul(principal, annual_rate), duration_blocks)
        return numerator // (RATE_DENOMINATION * BLOCKS_PER_YEAR)

    @staticmethod
    def loan_duration(borrow_height: int, current_height: int) -> int:
        if borrow_height > current_height:
            raise InvalidDuration(
                f"Loan originated at height {borrow_height}, after current height {current_height}"
            )
        return current_height - borrow_height

    def total_owed(
        self,
        principal: int,
        annual_rate: int,
        borrow_height: int,
        current_height: int,
    ) -> int:
        duration = self.loan_duration(borrow_height, current_height)
        interest = self.compute_duration_interest(principal, annual_rate, duration)
        return checked_add(principal, interest)

    def compute_update(
        self, state: ValueRegister, context: TransitionContext
    ) -> ValueRegister:
        rate_change = context.rate_change_required
        logger.debug(
            "Rate change candidate: %d -> %d",
            state.annual_rate_required,
            rate_change.new_rate,
        )
        return state.evolve(
            borrow_token_value=BORROW_TOKEN_DENOMINATION,
            annual_rate=rate_change.new_rate,
            carried_value=state.carried_value - context.execution_fee,
        )
