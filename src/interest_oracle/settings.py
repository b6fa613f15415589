"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

try:
    import tomllib  # py311+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from dotenv import load_dotenv
from pydantic import (
    Field,
    SecretStr,
    field_validator,
    model_validator,
)
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import (
    COEFFICIENT_COUNT,
    COEFFICIENT_PRESETS,
    DEFAULT_COEFFICIENT_PRESET,
    DEFAULT_MAXIMUM_EXECUTION_FEE,
)
from .domain import RateModelKind

load_dotenv()

_TOKEN_ID = re.compile(r"^0x[0-9a-fA-F]{64}$")

SECRET_FIELDS = {"governance_private_key"}


class OracleSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with INTEREST_ORACLE_)
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- accrual methodology ---
    model: RateModelKind = RateModelKind.COMPOUND

    # --- unique token ids ---
    interest_nft_id: str | None = None
    parameter_nft_id: str | None = None
    pool_nft_id: str | None = None
    access_policy: str | None = None

    # --- compound model ---
    coefficient_preset: str | None = DEFAULT_COEFFICIENT_PRESET
    coefficients: list[int] | None = None

    # --- transition limits ---
    maximum_execution_fee: int = Field(
        default=DEFAULT_MAXIMUM_EXECUTION_FEE,
        ge=0,
        description="Largest amount of carried value a transition may spend on execution.",
    )

    # --- governance (simple model) ---
    governance_signers: list[str] = Field(default_factory=list)
    governance_threshold: int = Field(default=1, ge=1)
    governance_private_key: SecretStr | None = None

    # --- persistence ---
    state_file: Path = Path("interest-oracle-state.json")

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="INTEREST_ORACLE_",
        env_file=".env",
        extra="ignore",  # ignore unknown keys in env/config file
    )

    @field_validator("governance_private_key", mode="before")
    @classmethod
    def wrap_secrets(cls, v: Any) -> SecretStr | None:
        """Wrap string secrets in SecretStr."""
        if v is None or isinstance(v, SecretStr):
            return v
        return SecretStr(v)

    @field_validator(
        "interest_nft_id", "parameter_nft_id", "pool_nft_id", "access_policy"
    )
    @classmethod
    def validate_token_id(cls, v: str | None) -> str | None:
        if v is not None and not _TOKEN_ID.match(v):
            raise ValueError(f"{v!r} is not a 0x-prefixed 32 byte hex id")
        return v

    @field_validator("coefficient_preset")
    @classmethod
    def validate_preset(cls, v: str | None) -> str | None:
        if v is not None and v not in COEFFICIENT_PRESETS:
            raise ValueError(
                f"Unknown coefficient preset {v!r}. "
                f"Available presets: {', '.join(COEFFICIENT_PRESETS)}"
            )
        return v

    @field_validator("coefficients")
    @classmethod
    def validate_coefficients(cls, v: list[int] | None) -> list[int] | None:
        if v is not None and len(v) != COEFFICIENT_COUNT:
            raise ValueError(
                f"coefficients must hold exactly {COEFFICIENT_COUNT} values, got {len(v)}"
            )
        return v

    @model_validator(mode="after")
    def validate_governance_threshold(self) -> "OracleSettings":
        """Validate that the threshold can be met by the configured signers."""
        if self.governance_signers and self.governance_threshold > len(
            self.governance_signers
        ):
            raise ValueError(
                f"governance_threshold ({self.governance_threshold}) "
                f"must not exceed the number of governance_signers ({len(self.governance_signers)})"
            )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get("INTEREST_ORACLE_CONFIG")
        cfg_path = Path(env_cfg) if env_cfg else None

        class TomlConfigSource(PydanticBaseSettingsSource):
            def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
                super().__init__(settings_cls)
                self._path = path

            def get_field_value(
                self, field: Any, field_name: str
            ) -> tuple[Any, str, bool]:
                return None, "", False

            def __call__(self) -> dict[str, Any]:
                if not self._path:
                    # Try default locations
                    local_config = Path("interest-oracle.toml")
                    user_config = (
                        Path.home() / ".config" / "interest-oracle" / "config.toml"
                    )
                    if local_config.exists():
                        self._path = local_config
                    elif user_config.exists():
                        self._path = user_config
                    else:
                        return {}

                if not self._path.exists():
                    return {}

                with self._path.open("rb") as f:
                    data = tomllib.load(f)  # supports top-level or [interest_oracle]
                body = data.get("interest_oracle", data)
                if not isinstance(body, dict):
                    return {}

                for key in SECRET_FIELDS:
                    if key in body:
                        raise ValueError(
                            f"Security violation: '{key}' found in TOML config file. "
                            f"Secrets must only be provided via environment variables or CLI flags."
                        )

                return body

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            dotenv_settings,  # .env
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
            file_secret_settings,  # optional secrets dir
        )

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the config as a dict with secrets redacted."""
        data = self.model_dump(mode="json")
        if self.governance_private_key:
            data["governance_private_key"] = "***redacted***"
        return data

    @property
    def effective_coefficients(self) -> tuple[int, ...]:
        """Explicit coefficients win over the named preset."""
        if self.coefficients is not None:
            return tuple(self.coefficients)
        if self.coefficient_preset is None:
            raise ValueError("Either coefficients or coefficient_preset must be configured")
        return COEFFICIENT_PRESETS[self.coefficient_preset]

    @property
    def interest_nft_id_required(self) -> str:
        """Get interest_nft_id, raising ValueError if not set."""
        if self.interest_nft_id is None:
            raise ValueError("interest_nft_id must be configured")
        return self.interest_nft_id

    @property
    def parameter_nft_id_required(self) -> str:
        """Get parameter_nft_id, raising ValueError if not set."""
        if self.parameter_nft_id is None:
            raise ValueError("parameter_nft_id must be configured")
        return self.parameter_nft_id

    @property
    def pool_nft_id_required(self) -> str:
        """Get pool_nft_id, raising ValueError if not set."""
        if self.pool_nft_id is None:
            raise ValueError("pool_nft_id must be configured")
        return self.pool_nft_id
