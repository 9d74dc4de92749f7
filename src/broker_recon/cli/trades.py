"""Trades command - import a trade file and show the per-day journal."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - Required at runtime for Typer introspection
from typing import Annotated

import typer
from rich.table import Table

from broker_recon.cli.utils import (
    console,
    echo_json,
    format_signed_amount,
    print_diagnostics,
    read_export_file,
)


def trades_command(
    file: Annotated[Path, typer.Argument(help="Execution export, journal backup or P/L report.")],
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    show_skipped: Annotated[
        bool,
        typer.Option("--show-skipped", help="Summarize rows that were skipped."),
    ] = False,
) -> None:
    """Import a trade file and show net P/L per day."""
    from broker_recon.diagnostics import Diagnostics
    from broker_recon.trades import detect_trade_format, parse_trades_csv

    text = read_export_file(file)
    diagnostics = Diagnostics()
    days = parse_trades_csv(text, diagnostics=diagnostics)

    if output_json:
        echo_json({day: entry.to_dict() for day, entry in days.items()})
        return

    if not days:
        console.print("[yellow]No trades found.[/yellow]")
        if show_skipped:
            print_diagnostics(diagnostics)
        return

    fmt = detect_trade_format(text)
    table = Table(title=f"Trade Journal ({fmt.value})")
    table.add_column("Date", style="cyan")
    table.add_column("Trades", justify="right")
    table.add_column("Instruments")
    table.add_column("Fees", justify="right")
    table.add_column("Net P/L", justify="right")

    for day, entry in days.items():
        instruments = sorted({trade.instrument for trade in entry.trades})
        table.add_row(
            day,
            str(len(entry.trades)),
            ", ".join(instruments),
            f"{entry.fees:,.2f}",
            format_signed_amount(entry.total),
        )

    console.print(table)
    grand_total = sum(entry.total for entry in days.values())
    console.print(f"Total: {format_signed_amount(grand_total)} over {len(days)} day(s)")

    if show_skipped:
        print_diagnostics(diagnostics)
