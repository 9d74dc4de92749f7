"""
Broker statement reconciliation.

Imports brokerage activity statements, trade execution exports and payslips into
portfolio snapshots, FIFO-matched day journals and monthly salary records.
"""

__version__ = "0.1.0"

from broker_recon.config import ReconConfig, get_config, set_config
from broker_recon.diagnostics import Diagnostics, SkippedRow, SkipReason

# Configure structlog once at import time (quiet by default).
from broker_recon.logging import configure_structlog
from broker_recon.salary import SalaryEntry, parse_salary_csv
from broker_recon.statement import PortfolioSnapshot, parse_statement
from broker_recon.trades import DayEntry, match_executions, parse_executions, parse_trades_csv

configure_structlog()

__all__ = [
    "DayEntry",
    "Diagnostics",
    "PortfolioSnapshot",
    "ReconConfig",
    "SalaryEntry",
    "SkipReason",
    "SkippedRow",
    "__version__",
    "get_config",
    "match_executions",
    "parse_executions",
    "parse_salary_csv",
    "parse_statement",
    "parse_trades_csv",
    "set_config",
]
