"""
CLI application for broker statement reconciliation.

Provides commands to import activity statements, trade files and payslips.
"""

from __future__ import annotations

import typer
from dotenv import find_dotenv, load_dotenv

from broker_recon.cli.portfolio import portfolio_command
from broker_recon.cli.salary import salary_command
from broker_recon.cli.trades import trades_command
from broker_recon.cli.utils import console

app = typer.Typer(
    name="broker-recon",
    help="Broker statement reconciliation - portfolio snapshots, trade journals, payslips.",
    add_completion=False,
)

app.command("trades")(trades_command)
app.command("portfolio")(portfolio_command)
app.command("salary")(salary_command)


@app.callback()
def main() -> None:
    """Broker statement reconciliation CLI."""
    load_dotenv(find_dotenv(usecwd=True))


@app.command()
def version() -> None:
    """Show version information."""
    from broker_recon import __version__

    console.print(f"broker-recon v{__version__}")


__all__ = ["app"]
