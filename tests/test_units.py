from __future__ import annotations

import pytest

from interest_oracle.constants import BORROW_TOKEN_DENOMINATION, MAX_UINT256
from interest_oracle.errors import OverflowRisk
from interest_oracle.units import (
    checked_add,
    checked_div,
    checked_mul,
    to_borrow_token_amount,
    to_debt_amount,
)


def test_checked_mul_within_bounds():
    assert checked_mul(10**38, 10**38) == 10**76


def test_checked_mul_overflow():
    with pytest.raises(OverflowRisk, match="multiplication"):
        checked_mul(2**200, 2**100)


def test_checked_add_overflow():
    with pytest.raises(OverflowRisk, match="addition"):
        checked_add(MAX_UINT256, 1)


def test_checked_add_custom_limit():
    assert checked_add(2**64 - 2, 1, limit=2**64 - 1) == 2**64 - 1
    with pytest.raises(OverflowRisk):
        checked_add(2**64 - 1, 1, limit=2**64 - 1)


def test_checked_div_truncates_toward_zero():
    assert checked_div(7, 2) == 3
    assert checked_div(-7, 2) == -3
    assert checked_div(7, -2) == -3
    assert checked_div(-7, -2) == 3


def test_checked_div_by_zero():
    with pytest.raises(OverflowRisk, match="Division by zero"):
        checked_div(1, 0)


def test_debt_amount_at_par():
    assert to_debt_amount(1_000, BORROW_TOKEN_DENOMINATION) == 1_000


def test_debt_amount_after_interest():
    value = 10_250_000_000_000_000  # 1.025
    assert to_debt_amount(1_000, value) == 1_025
    assert to_debt_amount(1, value) == 1  # truncated


def test_borrow_token_amount_after_interest():
    value = 10_250_000_000_000_000
    assert to_borrow_token_amount(1_025, value) == 1_000


def test_borrow_token_amount_rejects_zero_value():
    with pytest.raises(OverflowRisk):
        to_borrow_token_amount(1_000, 0)


@pytest.mark.parametrize(
    "value",
    [
        BORROW_TOKEN_DENOMINATION,
        10_250_000_000_000_000,
        12_345_678_901_234_567,
        3 * BORROW_TOKEN_DENOMINATION + 7,
    ],
)
def test_round_trip_loses_at_most_one_unit(value):
    for amount in [0, 1, 7, 999, 123_456_789, 10**18 + 3]:
        debt = to_debt_amount(amount, value)
        recovered = to_borrow_token_amount(debt, value)
        assert amount - 1 <= recovered <= amount
