"""Tests for the fixed (simple interest) rate model."""

from __future__ import annotations

import pytest

from interest_oracle.constants import BLOCKS_PER_YEAR, BORROW_TOKEN_DENOMINATION
from interest_oracle.domain import (
    RateChange,
    RateModelKind,
    TransitionContext,
    ValueRegister,
)
from interest_oracle.errors import InvalidDuration, MalformedInput
from interest_oracle.rate_models import FixedRateModel, get_rate_model
from interest_oracle.settings import OracleSettings


@pytest.fixture
def config() -> OracleSettings:
    return OracleSettings(model=RateModelKind.SIMPLE, interest_nft_id="0x" + "11" * 32)


@pytest.fixture
def model(config) -> FixedRateModel:
    return FixedRateModel(config)


class TestDurationInterest:
    def test_six_months_at_fifteen_percent_truncates(self, model):
        # 100 * 15% * 0.5 = 7.5 -> 7
        assert model.compute_duration_interest(100, 150_000, BLOCKS_PER_YEAR // 2) == 7

    def test_full_year(self, model):
        assert model.compute_duration_interest(1_000_000, 150_000, BLOCKS_PER_YEAR) == 150_000

    def test_zero_duration(self, model):
        assert model.compute_duration_interest(1_000_000, 150_000, 0) == 0

    def test_zero_rate(self, model):
        assert model.compute_duration_interest(1_000_000, 0, BLOCKS_PER_YEAR) == 0

    def test_negative_duration(self, model):
        with pytest.raises(InvalidDuration):
            model.compute_duration_interest(100, 150_000, -1)

    def test_negative_principal(self, model):
        with pytest.raises(MalformedInput):
            model.compute_duration_interest(-100, 150_000, 10)


class TestTotalOwed:
    def test_principal_plus_truncated_interest(self, model):
        assert model.total_owed(100, 150_000, 1_000, 1_000 + BLOCKS_PER_YEAR // 2) == 107

    def test_same_block(self, model):
        assert model.total_owed(100, 150_000, 5_000, 5_000) == 100

    def test_origination_in_future(self, model):
        with pytest.raises(InvalidDuration, match="after current height"):
            model.total_owed(100, 150_000, 5_001, 5_000)


class TestComputeUpdate:
    def test_sets_new_rate_and_keeps_par(self, model):
        register = ValueRegister(
            identifier="0x" + "11" * 32,
            access_policy="0x" + "44" * 32,
            borrow_token_value=BORROW_TOKEN_DENOMINATION,
            carried_value=1_000,
            annual_rate=100_000,
        )
        context = TransitionContext(
            current_height=10, rate_change=RateChange(new_rate=150_000), execution_fee=10
        )

        successor = model.compute_update(register, context)

        assert successor.annual_rate == 150_000
        assert successor.borrow_token_value == BORROW_TOKEN_DENOMINATION
        assert successor.carried_value == 990
        assert successor.last_update_height is None


def test_registry_selects_model_from_config(config):
    assert isinstance(get_rate_model(config), FixedRateModel)
    assert get_rate_model(config).kind is RateModelKind.SIMPLE
