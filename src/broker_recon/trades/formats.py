"""Trade file format detection and the single import entry point."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

import structlog

from broker_recon.config import ReconConfig, get_config
from broker_recon.constants import EXECUTION_COLUMNS, JOURNAL_MARKERS
from broker_recon.diagnostics import Diagnostics
from broker_recon.parsing import parse_row, resolve_columns
from broker_recon.trades._fifo import match_executions
from broker_recon.trades.executions import parse_executions
from broker_recon.trades.journal import parse_journal_csv
from broker_recon.trades.realized import parse_realized_csv

if TYPE_CHECKING:
    from broker_recon.trades.models import DayEntry

logger = structlog.get_logger()


class TradeFormat(str, Enum):
    """Supported trade file layouts."""

    EXECUTIONS = "executions"
    """Flat per-fill export (side, price, time)."""

    JOURNAL = "journal"
    """This tool's own journal backup."""

    REALIZED = "realized"
    """Report with a realized P/L per closing row."""


def _first_line(text: str) -> str:
    for line in text.removeprefix("\ufeff").splitlines():
        if line.strip():
            return line
    return ""


def detect_trade_format(text: str) -> TradeFormat:
    """Pick the layout from the first non-blank line; anything unrecognized is `REALIZED`."""
    header = parse_row(_first_line(text))
    cols = resolve_columns(header, EXECUTION_COLUMNS)
    if all(field in cols for field in ("side", "price", "time")):
        return TradeFormat.EXECUTIONS

    joined = ",".join(token.casefold() for token in header)
    if any(marker in joined for marker in JOURNAL_MARKERS):
        return TradeFormat.JOURNAL
    return TradeFormat.REALIZED


def parse_trades_csv(
    text: str,
    *,
    config: ReconConfig | None = None,
    diagnostics: Diagnostics | None = None,
) -> dict[str, DayEntry]:
    """
    Import any supported trade file into day entries keyed by ISO date.

    Execution exports are matched FIFO into round trips; journal backups and realized
    reports are taken as stated. In every case `DayEntry.total` is net of fees.

    Returns:
        Mapping of date -> DayEntry; empty for inputs with fewer than two lines.
    """
    config = config or get_config()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    if sum(1 for line in text.splitlines() if line.strip()) < 2:
        return {}

    fmt = detect_trade_format(text)
    logger.debug("Detected trade file format", format=fmt.value)
    if fmt is TradeFormat.EXECUTIONS:
        executions = parse_executions(text, diagnostics=diagnostics)
        return match_executions(executions, config=config).days
    if fmt is TradeFormat.JOURNAL:
        return parse_journal_csv(text, diagnostics=diagnostics)
    return parse_realized_csv(text, config=config, diagnostics=diagnostics)
