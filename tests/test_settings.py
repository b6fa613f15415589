"""Tests for settings configuration loading."""

from __future__ import annotations

from textwrap import dedent

import pytest

from interest_oracle.constants import COEFFICIENT_PRESETS
from interest_oracle.domain import RateModelKind
from interest_oracle.settings import OracleSettings


def test_loads_top_level_config(tmp_path, monkeypatch):
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        dedent(
            """
            model = "simple"
            interest_nft_id = "0x1111111111111111111111111111111111111111111111111111111111111111"
            maximum_execution_fee = 500
            governance_signers = ["0x1111111111111111111111111111111111111111"]
            """
        ).strip()
    )

    monkeypatch.setenv("INTEREST_ORACLE_CONFIG", str(config_path))

    settings = OracleSettings()

    assert settings.model is RateModelKind.SIMPLE
    assert settings.interest_nft_id == "0x" + "11" * 32
    assert settings.maximum_execution_fee == 500
    assert settings.governance_signers == ["0x1111111111111111111111111111111111111111"]


def test_loads_namespaced_table(tmp_path, monkeypatch):
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        dedent(
            """
            [interest_oracle]
            coefficients = [0, 10000000, 0, 0, 0, 0]
            access_policy = "0x4444444444444444444444444444444444444444444444444444444444444444"
            """
        ).strip()
    )

    monkeypatch.setenv("INTEREST_ORACLE_CONFIG", str(config_path))

    settings = OracleSettings()

    assert settings.effective_coefficients == (0, 10_000_000, 0, 0, 0, 0)
    assert settings.access_policy == "0x" + "44" * 32


def test_env_overrides_config_file(tmp_path, monkeypatch):
    config_path = tmp_path / "config.toml"
    config_path.write_text("maximum_execution_fee = 500\n")

    monkeypatch.setenv("INTEREST_ORACLE_CONFIG", str(config_path))
    monkeypatch.setenv("INTEREST_ORACLE_MAXIMUM_EXECUTION_FEE", "700")

    assert OracleSettings().maximum_execution_fee == 700
    assert OracleSettings(maximum_execution_fee=900).maximum_execution_fee == 900


def test_secret_in_config_file_rejected(tmp_path, monkeypatch):
    config_path = tmp_path / "config.toml"
    config_path.write_text('governance_private_key = "0xabc"\n')

    monkeypatch.setenv("INTEREST_ORACLE_CONFIG", str(config_path))

    with pytest.raises(ValueError, match="Security violation"):
        OracleSettings()


def test_missing_config_file_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("INTEREST_ORACLE_CONFIG", str(tmp_path / "absent.toml"))

    settings = OracleSettings()

    assert settings.model is RateModelKind.COMPOUND
    assert settings.effective_coefficients == COEFFICIENT_PRESETS["linear"]


def test_safe_dict_redacts_private_key():
    settings = OracleSettings(governance_private_key="0x" + "01" * 32)

    data = settings.as_safe_dict()

    assert data["governance_private_key"] == "***redacted***"
    assert settings.governance_private_key.get_secret_value() == "0x" + "01" * 32
