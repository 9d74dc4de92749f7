"""Shared utilities for CLI commands (console output, file loading, formatting)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from pathlib import Path

    from broker_recon.diagnostics import Diagnostics

console = Console()


def read_export_file(path: Path) -> str:
    """Read an export as text, tolerating a byte-order mark and invalid UTF-8.

    Raises:
        typer.Exit: With code 1 if the file does not exist or cannot be read.
    """
    if not path.is_file():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)
    try:
        return path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        console.print(f"[red]Error:[/red] Could not read {path}: {e}")
        raise typer.Exit(1) from None


def load_rates_file(path: Path) -> dict[str, float]:
    """Load a `{"EUR_USD": 1.08}` JSON map of known exchange rates.

    Raises:
        typer.Exit: With code 1 if the file is missing, not JSON, or not a flat
            mapping of pair -> number.
    """
    text = read_export_file(path)
    try:
        raw = json.loads(text)
    except json.JSONDecodeError:
        console.print(f"[red]Error:[/red] Rates file is not valid JSON: {path}")
        raise typer.Exit(1) from None

    if not isinstance(raw, dict) or not all(
        isinstance(rate, int | float) and not isinstance(rate, bool) for rate in raw.values()
    ):
        console.print(
            f"[red]Error:[/red] Rates file must contain a JSON object of pair -> rate: {path}"
        )
        raise typer.Exit(1)
    return {str(pair): float(rate) for pair, rate in raw.items()}


def echo_json(payload: Any) -> None:
    """Print a JSON document on stdout (no Rich markup)."""
    typer.echo(json.dumps(payload, indent=2, default=str))


def format_signed_amount(amount: float, currency: str = "") -> str:
    """Format an amount with sign and color markup.

    Args:
        amount: Value in currency units (can be positive, negative, or zero).
        currency: Optional code appended after the number.

    Returns:
        Formatted string with color markup.
    """
    suffix = f" {currency}" if currency else ""
    value = f"{abs(amount):,.2f}{suffix}"
    if amount > 0:
        return f"[green]+{value}[/green]"
    if amount < 0:
        return f"[red]-{value}[/red]"
    return value


def print_diagnostics(diagnostics: Diagnostics) -> None:
    """Print a per-reason summary of skipped rows."""
    if not diagnostics.skipped:
        console.print("[dim]No rows skipped.[/dim]")
        return

    table = Table(title="Skipped Rows")
    table.add_column("Reason", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("First lines", style="dim")
    for reason, count in sorted(diagnostics.by_reason().items(), key=lambda item: item[0].value):
        lines = [str(row.line_number) for row in diagnostics.skipped if row.reason is reason]
        table.add_row(reason.value, str(count), ", ".join(lines[:5]))
    console.print(table)
