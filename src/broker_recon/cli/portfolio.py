"""Portfolio command - parse an activity statement into a snapshot."""

from __future__ import annotations

import os
from pathlib import Path  # noqa: TC003 - Required at runtime for Typer introspection
from typing import TYPE_CHECKING, Annotated

import typer
from pydantic import ValidationError
from rich.table import Table

from broker_recon.cli.utils import (
    console,
    echo_json,
    format_signed_amount,
    load_rates_file,
    print_diagnostics,
    read_export_file,
)

if TYPE_CHECKING:
    from broker_recon.statement import PortfolioSnapshot

BASE_CURRENCY_ENV_VAR = "BROKER_RECON_BASE_CURRENCY"


def _positions_table(snapshot: PortfolioSnapshot) -> Table:
    table = Table(title=f"Positions {snapshot.period}".strip())
    table.add_column("Symbol", style="cyan")
    table.add_column("Ccy")
    table.add_column("Qty", justify="right")
    table.add_column("Cost", justify="right")
    table.add_column("Close", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("Unrealized", justify="right")
    table.add_column("Realized", justify="right")

    for symbol, pos in sorted(snapshot.positions.items()):
        table.add_row(
            symbol if not pos.is_closed else f"[dim]{symbol} (closed)[/dim]",
            pos.currency,
            f"{pos.quantity:g}",
            f"{pos.cost_basis:,.2f}",
            f"{pos.close_price:,.2f}",
            f"{pos.market_value:,.2f}",
            format_signed_amount(pos.unrealized_pnl),
            format_signed_amount(pos.realized_pnl),
        )
    return table


def _cash_table(snapshot: PortfolioSnapshot, base_currency: str) -> Table:
    table = Table(title="Cash & Rates")
    table.add_column("Currency", style="cyan")
    table.add_column("Balance", justify="right")
    table.add_column(f"Rate to {base_currency}", justify="right")

    for currency, amount in sorted(snapshot.cash.items()):
        if currency == base_currency:
            rate = "1"
        else:
            value = snapshot.exchange_rates.get(f"{currency}_{base_currency}", 0.0)
            rate = f"{value:g}" if value else "[yellow]rate needed[/yellow]"
        table.add_row(currency, f"{amount:,.2f}", rate)
    return table


def _summary_table(snapshot: PortfolioSnapshot, base_currency: str) -> Table:
    summary = snapshot.summary
    table = Table(title=f"Summary ({base_currency})", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total value:", f"{summary.total_value:,.2f}")
    table.add_row("Unrealized P/L:", format_signed_amount(summary.unrealized))
    table.add_row("Realized P/L:", format_signed_amount(summary.realized))
    table.add_row("Dividends:", f"{summary.dividends:,.2f}")
    table.add_row("Withholding tax:", f"{summary.withholding_tax:,.2f}")
    return table


def portfolio_command(
    file: Annotated[Path, typer.Argument(help="Multi-section activity statement CSV.")],
    rates: Annotated[
        Path | None,
        typer.Option("--rates", help="JSON file of known rates, e.g. {\"EUR_USD\": 1.08}."),
    ] = None,
    base_currency: Annotated[
        str | None,
        typer.Option(
            "--base-currency",
            help="Reporting currency. Defaults to BROKER_RECON_BASE_CURRENCY or USD.",
            show_default=False,
        ),
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    show_skipped: Annotated[
        bool,
        typer.Option("--show-skipped", help="Summarize rows that were skipped."),
    ] = False,
) -> None:
    """Parse an activity statement into positions, cash, rates and a summary."""
    from broker_recon.config import ReconConfig, get_config
    from broker_recon.diagnostics import Diagnostics
    from broker_recon.statement import parse_statement

    # Priority: CLI flag > BROKER_RECON_BASE_CURRENCY env var > configured default
    requested = base_currency or os.getenv(BASE_CURRENCY_ENV_VAR)
    try:
        config = get_config()
        if requested:
            config = ReconConfig(**{**config.model_dump(), "base_currency": requested})
    except ValidationError:
        console.print(
            f"[red]Error:[/red] Invalid base currency '{requested}'. "
            "Expected a three-letter code such as USD."
        )
        raise typer.Exit(1) from None

    existing_rates = load_rates_file(rates) if rates is not None else None
    text = read_export_file(file)
    diagnostics = Diagnostics()
    snapshot = parse_statement(text, existing_rates, config=config, diagnostics=diagnostics)

    if output_json:
        payload = snapshot.to_dict()
        payload["base_currency"] = config.base_currency
        payload["missing_rates"] = snapshot.missing_rates()
        echo_json(payload)
        return

    if not snapshot.positions and not snapshot.cash:
        console.print("[yellow]No positions or cash balances found.[/yellow]")
    else:
        console.print(_positions_table(snapshot))
        console.print(_cash_table(snapshot, config.base_currency))
    console.print(_summary_table(snapshot, config.base_currency))

    missing = snapshot.missing_rates()
    if missing:
        console.print(
            f"[yellow]Rates needed for:[/yellow] {', '.join(missing)} "
            "[dim](pass them with --rates)[/dim]"
        )

    if show_skipped:
        print_diagnostics(diagnostics)
