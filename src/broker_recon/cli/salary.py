"""Salary command - import a payslip CSV."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path  # noqa: TC003 - Required at runtime for Typer introspection
from typing import Annotated

import typer
from rich.table import Table

from broker_recon.cli.utils import console, echo_json, read_export_file


def salary_command(
    file: Annotated[Path, typer.Argument(help="Payslip CSV with year and month columns.")],
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Import monthly payslips and show gross, deductions and net per month."""
    from broker_recon.salary import parse_salary_csv

    years = parse_salary_csv(read_export_file(file))

    if output_json:
        echo_json(
            {
                year: {month: asdict(entry) for month, entry in months.items()}
                for year, months in years.items()
            }
        )
        return

    if not years:
        console.print("[yellow]No payslip rows found.[/yellow]")
        return

    for year, months in sorted(years.items()):
        table = Table(title=f"Salary {year}")
        table.add_column("Month", style="cyan")
        table.add_column("Gross", justify="right")
        table.add_column("Deductions", justify="right")
        table.add_column("Net", justify="right")
        table.add_column("Payout", justify="right")
        table.add_column("Comment", style="dim")
        for month, entry in sorted(months.items()):
            table.add_row(
                month,
                f"{entry.gross:,.2f}",
                f"{entry.deductions:,.2f}",
                f"{entry.net:,.2f}",
                f"{entry.payout:,.2f}",
                entry.comment,
            )
        total_net = sum(entry.net for entry in months.values())
        table.add_row("Total", "", "", f"{total_net:,.2f}", "", "", style="bold")
        console.print(table)
