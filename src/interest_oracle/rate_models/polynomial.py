"""Utilization-responsive compound accrual.

Every period of ``UPDATE_FREQUENCY`` blocks the borrow token value is
multiplied by a rate that is a fifth degree polynomial of pool utilization:

    rate = M + a + b*u + c*u^2 + d*u^3 + e*u^4 + f*u^5

with ``u`` and the result in units of ``INTEREST_DENOMINATION`` (M) and the
coefficients in units of ``COEFFICIENT_DENOMINATION`` (D). The polynomial is
summed over a common denominator and truncated once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from ..constants import (
    COEFFICIENT_COUNT,
    COEFFICIENT_DENOMINATION,
    INTEREST_DENOMINATION,
    MAX_UINT64,
    PERIODS_PER_YEAR,
    UPDATE_FREQUENCY,
)
from ..domain import RateModelKind, TransitionContext, ValueRegister
from ..errors import MalformedInput
from ..processors import utilization_from_snapshot
from ..units import checked_add, checked_div, checked_mul
from .base import BaseRateModel

logger = logging.getLogger(__name__)

_DEGREE = COEFFICIENT_COUNT - 1


@dataclass(frozen=True)
class RatePoint:
    """One row of a rate table."""

    utilization: int
    period_rate: int
    apr: Decimal
    apy: Decimal


class PolynomialRateModel(BaseRateModel):
    """Compound accrual driven by governance coefficients."""

    @property
    def kind(self) -> RateModelKind:
        return RateModelKind.COMPOUND

    @property
    def name(self) -> str:
        return "Polynomial Rate Model"

    def compute_period_rate(self, utilization: int, coefficients: Sequence[int]) -> int:
        """Compute the per-period multiplier for a utilization.

        Args:
            utilization: Pool utilization in [0, INTEREST_DENOMINATION]
            coefficients: ``[a, b, c, d, e, f]`` scaled by COEFFICIENT_DENOMINATION

        Returns:
            Rate to apply as ``value * rate // INTEREST_DENOMINATION``. Negative
            coefficients may push it below INTEREST_DENOMINATION; no clamping
            is applied here.
        """
        if len(coefficients) != COEFFICIENT_COUNT:
            raise MalformedInput(
                f"Expected {COEFFICIENT_COUNT} coefficients, got {len(coefficients)}"
            )
        if not 0 <= utilization <= INTEREST_DENOMINATION:
            raise MalformedInput(
                f"Utilization {utilization} outside [0, {INTEREST_DENOMINATION}]"
            )

        numerator = 0
        for power, coefficient in enumerate(coefficients):
            term = checked_mul(coefficient, utilization**power)
            term = checked_mul(term, INTEREST_DENOMINATION ** (_DEGREE - power))
            numerator = checked_add(numerator, term)

        denominator = COEFFICIENT_DENOMINATION * INTEREST_DENOMINATION ** (_DEGREE - 1)
        rate = INTEREST_DENOMINATION + checked_div(numerator, denominator)

        if rate < INTEREST_DENOMINATION:
            logger.warning(
                "Period rate %d is below par at utilization %d; coefficients %s",
                rate,
                utilization,
                list(coefficients),
            )
        return rate

    def compute_update(
        self, state: ValueRegister, context: TransitionContext
    ) -> ValueRegister:
        pool = context.pool_required
        parameters = context.parameters_required

        utilization = utilization_from_snapshot(pool, state.borrow_token_value)
        rate = self.compute_period_rate(utilization, parameters.coefficients)
        new_value = checked_div(
            checked_mul(state.borrow_token_value, rate), INTEREST_DENOMINATION
        )
        next_height = checked_add(
            state.last_update_height_required, UPDATE_FREQUENCY, limit=MAX_UINT64
        )

        logger.debug(
            "Accrual candidate: utilization=%d rate=%d value %d -> %d, height %d -> %d",
            utilization,
            rate,
            state.borrow_token_value,
            new_value,
            state.last_update_height_required,
            next_height,
        )

        return state.evolve(
            borrow_token_value=new_value,
            last_update_height=next_height,
            carried_value=state.carried_value - context.execution_fee,
        )

    @property
    def periods_per_year(self) -> int:
        return PERIODS_PER_YEAR

    def annual_yield(self, rate: int) -> tuple[Decimal, Decimal]:
        """Annualise a period rate.

        Returns:
            ``(apr, apy)`` as decimals, e.g. ``Decimal("0.05")`` for 5%.
        """
        period = Decimal(rate - INTEREST_DENOMINATION) / INTEREST_DENOMINATION
        apr = period * self.periods_per_year
        apy = (1 + period) ** self.periods_per_year - 1
        return apr, apy

    def rate_table(
        self, coefficients: Sequence[int], points: int = 11
    ) -> list[RatePoint]:
        """Tabulate period rate and annual yield over evenly spaced utilizations."""
        if points < 2:
            raise ValueError("points must be at least 2")

        table: list[RatePoint] = []
        for i in range(points):
            utilization = INTEREST_DENOMINATION * i // (points - 1)
            rate = self.compute_period_rate(utilization, coefficients)
            apr, apy = self.annual_yield(rate)
            table.append(
                RatePoint(utilization=utilization, period_rate=rate, apr=apr, apy=apy)
            )
        return table
