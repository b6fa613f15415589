"""Rich console formatter for registers and rate tables."""

from __future__ import annotations

from decimal import Decimal

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..constants import BORROW_TOKEN_DENOMINATION, INTEREST_DENOMINATION, RATE_DENOMINATION
from ..domain import RateModelKind, ValueRegister
from ..rate_models import RatePoint


def _truncate_id(identifier: str) -> str:
    """Truncate a token id for display."""
    return f"{identifier[:10]}...{identifier[-4:]}"


def _format_scaled(value: int, denomination: int, places: int = 8) -> str:
    return f"{Decimal(value) / denomination:.{places}f}"


def _format_percent(value: Decimal) -> str:
    return f"{value * 100:.4f}%"


def format_register_table(
    register: ValueRegister, version: int, console: Console | None = None
) -> None:
    """Print the live register as a panel."""
    console = console or Console()

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Key", style="dim")
    table.add_column("Value", style="cyan")
    table.add_row("Interest NFT", _truncate_id(register.identifier))
    table.add_row("Model", register.model.value)
    table.add_row("Version", str(version))
    table.add_row(
        "Borrow Token Value",
        f"{register.borrow_token_value:,} "
        f"({_format_scaled(register.borrow_token_value, BORROW_TOKEN_DENOMINATION, 12)})",
    )
    if register.model is RateModelKind.COMPOUND:
        table.add_row("Last Update Height", str(register.last_update_height))
    else:
        rate = register.annual_rate_required
        table.add_row(
            "Annual Rate",
            f"{rate:,} ({_format_percent(Decimal(rate) / RATE_DENOMINATION)})",
        )
    table.add_row("Carried Value", f"{register.carried_value:,}")

    console.print(Panel(table, title="[bold]Interest Register[/]", border_style="blue"))


def format_rate_table(points: list[RatePoint], console: Console | None = None) -> None:
    """Print a utilization -> rate table."""
    console = console or Console()

    table = Table(title="Polynomial Rate Curve", header_style="bold")
    table.add_column("Utilization", justify="right")
    table.add_column("Period Rate", justify="right", style="cyan")
    table.add_column("APR", justify="right")
    table.add_column("APY", justify="right", style="green")

    for point in points:
        table.add_row(
            _format_percent(Decimal(point.utilization) / INTEREST_DENOMINATION),
            _format_scaled(point.period_rate, INTEREST_DENOMINATION),
            _format_percent(point.apr),
            _format_percent(point.apy),
        )

    console.print(table)
