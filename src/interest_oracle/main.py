"""CLI entrypoint for the interest oracle."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from .authorization import SignatureAuthorization, sign_rate_change
from .domain import CoefficientRecord, PoolSnapshot, RateChange, RateModelKind
from .engine import AccrualEngine
from .errors import InterestOracleError
from .logger import get_logger, setup_logging
from .rate_models import PolynomialRateModel
from .report import format_rate_table, format_register_table
from .settings import OracleSettings
from .state import AppState
from .store import InterestReader

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Borrow token interest oracle for lending pools.",
)


def _build_logger() -> logging.Logger:
    """Build a logger instance."""
    return get_logger("interest_oracle")


def _state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if not isinstance(state, AppState):
        raise RuntimeError("CLI state has not been initialised")
    return state


def _interest_id(state: AppState) -> str:
    try:
        return state.settings.interest_nft_id_required
    except ValueError as e:
        raise typer.BadParameter(
            str(e), param_hint=["INTEREST_ORACLE_INTEREST_NFT_ID"]
        ) from e


def _load(state: AppState) -> None:
    path = state.settings.state_file
    if not path.exists():
        raise typer.BadParameter(
            f"State file {path} does not exist", param_hint=["--state-file"]
        )
    try:
        state.load_store()
    except InterestOracleError as e:
        raise _fail(state, e) from e


def _fail(state: AppState, error: InterestOracleError) -> typer.Exit:
    state.logger.error("%s: %s", error.__class__.__name__, error)
    typer.echo(f"Rejected ({error.__class__.__name__}): {error}", err=True)
    return typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include [interest_oracle] table).",
        ),
    ] = None,
    state_file: Annotated[
        Path | None,
        typer.Option("--state-file", help="JSON file holding the live registers."),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
):
    """Load configuration and logging shared by every command."""
    if config_path:
        os.environ["INTEREST_ORACLE_CONFIG"] = str(config_path)

    init_kwargs: dict[str, Path | str] = {}
    if state_file is not None:
        init_kwargs["state_file"] = state_file
    if log_level is not None:
        init_kwargs["log_level"] = log_level.upper()

    try:
        settings = OracleSettings(**init_kwargs)  # type: ignore[arg-type]
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e

    setup_logging(settings.log_level)
    ctx.obj = AppState(settings=settings, logger=_build_logger())


@app.command("show-config")
def show_config(ctx: typer.Context) -> None:
    """Print effective config (with secrets redacted)."""
    state = _state(ctx)
    typer.echo(json.dumps(state.settings.as_safe_dict(), indent=2))


@app.command()
def show(ctx: typer.Context) -> None:
    """Print the live interest register."""
    state = _state(ctx)
    identifier = _interest_id(state)
    _load(state)
    store = state.store_required
    try:
        register = store.read(identifier)
    except InterestOracleError as e:
        raise _fail(state, e) from e
    format_register_table(register, store.version(identifier))


@app.command()
def accrue(
    ctx: typer.Context,
    height: Annotated[int, typer.Option("--height", help="Current block height.")],
    pool_assets: Annotated[
        int, typer.Option("--pool-assets", help="Pool currency available in the pool.")
    ],
    borrow_tokens: Annotated[
        int,
        typer.Option("--borrow-tokens", help="Borrow tokens circulating outside the pool."),
    ],
    pool_id: Annotated[
        str | None,
        typer.Option("--pool-id", help="Token id of the pool record (defaults to config)."),
    ] = None,
    parameter_id: Annotated[
        str | None,
        typer.Option(
            "--parameter-id", help="Token id of the parameter record (defaults to config)."
        ),
    ] = None,
    fee: Annotated[
        int, typer.Option("--fee", help="Execution fee paid from carried value.")
    ] = 0,
) -> None:
    """Accrue one period of compound interest."""
    state = _state(ctx)
    settings = state.settings
    if settings.model is not RateModelKind.COMPOUND:
        raise typer.BadParameter("accrue requires model = compound")

    _interest_id(state)
    _load(state)
    pool = PoolSnapshot(
        identifier=pool_id or settings.pool_nft_id_required,
        pool_assets=pool_assets,
        borrow_tokens_circulating=borrow_tokens,
    )
    parameters = CoefficientRecord(
        identifier=parameter_id or settings.parameter_nft_id_required,
        coefficients=settings.effective_coefficients,
    )

    engine = AccrualEngine(settings, state.store_required)
    try:
        register = engine.accrue(height, pool, parameters, execution_fee=fee)
    except InterestOracleError as e:
        raise _fail(state, e) from e

    state.save_store()
    format_register_table(register, engine.version)


@app.command("set-rate")
def set_rate(
    ctx: typer.Context,
    rate: Annotated[
        int, typer.Argument(help="New annual rate, scaled by 10^6 (150000 = 15%).")
    ],
    height: Annotated[int, typer.Option("--height", help="Current block height.")],
    signature: Annotated[
        list[str] | None,
        typer.Option(
            "--signature",
            "-s",
            help="Governance signature; repeat for multisig. Signs with the configured key when omitted.",
        ),
    ] = None,
    fee: Annotated[
        int, typer.Option("--fee", help="Execution fee paid from carried value.")
    ] = 0,
) -> None:
    """Change the simple model's annual rate with governance approval."""
    state = _state(ctx)
    settings = state.settings
    if settings.model is not RateModelKind.SIMPLE:
        raise typer.BadParameter("set-rate requires model = simple")
    if not settings.governance_signers:
        raise typer.BadParameter(
            "governance_signers must be configured",
            param_hint=["INTEREST_ORACLE_GOVERNANCE_SIGNERS"],
        )

    identifier = _interest_id(state)
    _load(state)
    store = state.store_required

    signatures = list(signature or [])
    if not signatures:
        if settings.governance_private_key is None:
            raise typer.BadParameter(
                "Provide --signature or configure governance_private_key.",
                param_hint=["--signature", "INTEREST_ORACLE_GOVERNANCE_PRIVATE_KEY"],
            )
        signatures.append(
            sign_rate_change(
                settings.governance_private_key.get_secret_value(),
                store.read(identifier),
                rate,
                height,
                store.version(identifier),
            )
        )

    authorization = SignatureAuthorization(
        settings.governance_signers, settings.governance_threshold
    )
    engine = AccrualEngine(settings, store, authorization=authorization)
    try:
        register = engine.change_rate(
            RateChange(new_rate=rate, signatures=tuple(signatures)),
            height,
            execution_fee=fee,
        )
    except InterestOracleError as e:
        raise _fail(state, e) from e

    state.save_store()
    format_register_table(register, engine.version)


@app.command()
def rates(
    ctx: typer.Context,
    points: Annotated[
        int, typer.Option("--points", min=2, help="Number of utilization points.")
    ] = 11,
) -> None:
    """Tabulate the configured polynomial over utilization."""
    state = _state(ctx)
    model = PolynomialRateModel(state.settings)
    try:
        table = model.rate_table(state.settings.effective_coefficients, points)
    except InterestOracleError as e:
        raise _fail(state, e) from e
    format_rate_table(table)


@app.command()
def debt(
    ctx: typer.Context,
    amount: Annotated[int, typer.Argument(help="Borrow token amount.")],
) -> None:
    """Convert borrow tokens into pool currency at the live value."""
    state = _state(ctx)
    identifier = _interest_id(state)
    _load(state)
    reader = InterestReader(state.store_required, identifier)
    try:
        typer.echo(reader.debt_for(amount))
    except InterestOracleError as e:
        raise _fail(state, e) from e


@app.command("borrow-tokens")
def borrow_tokens(
    ctx: typer.Context,
    amount: Annotated[int, typer.Argument(help="Pool currency amount.")],
) -> None:
    """Convert pool currency into borrow tokens at the live value."""
    state = _state(ctx)
    identifier = _interest_id(state)
    _load(state)
    reader = InterestReader(state.store_required, identifier)
    try:
        typer.echo(reader.borrow_tokens_for(amount))
    except InterestOracleError as e:
        raise _fail(state, e) from e


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()
