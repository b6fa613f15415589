from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from interest_oracle.adapters.transition_checks.authorization import (
    AuthorizationCheckAdapter,
)
from interest_oracle.adapters.transition_checks.monotonic_value import FixedValueCheck
from interest_oracle.adapters.transition_checks.rate_bounds import RateBoundsCheck
from interest_oracle.constants import BORROW_TOKEN_DENOMINATION, RATE_DENOMINATION
from interest_oracle.domain import (
    RateChange,
    Transition,
    TransitionContext,
    ValueRegister,
)
from interest_oracle.errors import (
    InvalidRate,
    NonMonotonicValue,
    UnauthorizedRateChange,
)
from interest_oracle.settings import OracleSettings

INTEREST_ID = "0x" + "11" * 32


@pytest.fixture
def config():
    return OracleSettings(
        model="simple", interest_nft_id=INTEREST_ID, access_policy="0x" + "44" * 32
    )


@pytest.fixture
def current():
    return ValueRegister(
        identifier=INTEREST_ID,
        access_policy="0x" + "44" * 32,
        borrow_token_value=BORROW_TOKEN_DENOMINATION,
        carried_value=10_000,
        annual_rate=50_000,
    )


def make_transition(current, new_rate, requested=None, authorization=None, **changes):
    requested = new_rate if requested is None else requested
    return Transition(
        current=current,
        successor=current.evolve(annual_rate=new_rate, **changes),
        context=TransitionContext(
            current_height=500,
            rate_change=RateChange(new_rate=requested, signatures=("0xsig",)),
        ),
        authorization=authorization,
    )


class TestFixedValueCheck:
    def test_par_value_passes(self, config, current):
        assert FixedValueCheck(config).run_check(make_transition(current, 60_000)).passed

    def test_successor_off_par_fails(self, config, current):
        result = FixedValueCheck(config).run_check(
            make_transition(current, 60_000, borrow_token_value=BORROW_TOKEN_DENOMINATION + 1)
        )
        assert not result.passed
        assert result.error is NonMonotonicValue
        assert result.message.startswith("Successor")


class TestRateBoundsCheck:
    @pytest.mark.parametrize("rate", [0, 1, RATE_DENOMINATION])
    def test_rate_in_bounds(self, config, current, rate):
        assert RateBoundsCheck(config).run_check(make_transition(current, rate)).passed

    @pytest.mark.parametrize("rate", [-1, RATE_DENOMINATION + 1])
    def test_rate_out_of_bounds(self, config, current, rate):
        result = RateBoundsCheck(config).run_check(make_transition(current, rate))
        assert not result.passed
        assert result.error is InvalidRate

    def test_rate_not_requested(self, config, current):
        result = RateBoundsCheck(config).run_check(
            make_transition(current, 60_000, requested=70_000)
        )
        assert not result.passed
        assert "not requested" in result.message


class TestAuthorizationCheckAdapter:
    def test_authorized(self, config, current):
        authorization = MagicMock()
        authorization.is_authorized.return_value = True

        result = AuthorizationCheckAdapter(config).run_check(
            make_transition(current, 60_000, authorization=authorization)
        )

        assert result.passed
        authorization.is_authorized.assert_called_once_with(
            current, RateChange(new_rate=60_000, signatures=("0xsig",)), 500, 0
        )

    def test_rejected(self, config, current):
        authorization = MagicMock()
        authorization.is_authorized.return_value = False

        result = AuthorizationCheckAdapter(config).run_check(
            make_transition(current, 60_000, authorization=authorization)
        )

        assert not result.passed
        assert result.error is UnauthorizedRateChange
        assert "1 signature(s)" in result.message

    def test_no_authorization_configured(self, config, current):
        result = AuthorizationCheckAdapter(config).run_check(make_transition(current, 60_000))
        assert not result.passed
        assert "No governance authorization" in result.message

    def test_passes_store_version_to_authorization(self, config, current):
        authorization = MagicMock()
        authorization.is_authorized.return_value = True
        transition = make_transition(current, 60_000, authorization=authorization)
        transition = Transition(
            current=transition.current,
            successor=transition.successor,
            context=transition.context,
            version=3,
            authorization=authorization,
        )

        assert AuthorizationCheckAdapter(config).run_check(transition).passed
        assert authorization.is_authorized.call_args.args[3] == 3
