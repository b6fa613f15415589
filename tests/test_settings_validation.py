"""Tests for OracleSettings validation logic."""

import pytest
from pydantic import ValidationError

from interest_oracle.constants import COEFFICIENT_PRESETS
from interest_oracle.settings import OracleSettings


def test_token_ids_must_be_32_bytes():
    """Token ids are 0x-prefixed 32 byte hex strings."""
    with pytest.raises(ValidationError, match="32 byte hex id"):
        OracleSettings(interest_nft_id="0x1234")

    with pytest.raises(ValidationError, match="32 byte hex id"):
        OracleSettings(pool_nft_id="11" * 32)

    settings = OracleSettings(parameter_nft_id="0x" + "Ab" * 32)
    assert settings.parameter_nft_id == "0x" + "Ab" * 32


def test_unknown_coefficient_preset():
    with pytest.raises(ValidationError, match="Unknown coefficient preset"):
        OracleSettings(coefficient_preset="exponential")


@pytest.mark.parametrize("preset", sorted(COEFFICIENT_PRESETS))
def test_presets_resolve(preset):
    settings = OracleSettings(coefficient_preset=preset)
    assert settings.effective_coefficients == COEFFICIENT_PRESETS[preset]


def test_coefficients_need_six_values():
    with pytest.raises(ValidationError, match="exactly 6 values"):
        OracleSettings(coefficients=[1, 2, 3])


def test_explicit_coefficients_win_over_preset():
    settings = OracleSettings(
        coefficient_preset="steep", coefficients=[1, 2, 3, 4, 5, -6]
    )
    assert settings.effective_coefficients == (1, 2, 3, 4, 5, -6)


def test_no_coefficients_configured():
    settings = OracleSettings(coefficient_preset=None)
    with pytest.raises(ValueError, match="must be configured"):
        settings.effective_coefficients


def test_access_policy_is_a_token_id():
    with pytest.raises(ValidationError, match="32 byte hex id"):
        OracleSettings(access_policy="0x44")

    assert OracleSettings().access_policy is None


def test_maximum_execution_fee_non_negative():
    with pytest.raises(ValidationError, match="greater than or equal to 0"):
        OracleSettings(maximum_execution_fee=-1)


def test_governance_threshold_within_signers():
    with pytest.raises(ValidationError, match="must not exceed"):
        OracleSettings(
            governance_signers=["0x1111111111111111111111111111111111111111"],
            governance_threshold=2,
        )

    settings = OracleSettings(
        governance_signers=[
            "0x1111111111111111111111111111111111111111",
            "0x2222222222222222222222222222222222222222",
        ],
        governance_threshold=2,
    )
    assert settings.governance_threshold == 2


def test_required_properties():
    settings = OracleSettings()

    with pytest.raises(ValueError, match="interest_nft_id must be configured"):
        settings.interest_nft_id_required
    with pytest.raises(ValueError, match="pool_nft_id must be configured"):
        settings.pool_nft_id_required
    with pytest.raises(ValueError, match="parameter_nft_id must be configured"):
        settings.parameter_nft_id_required
