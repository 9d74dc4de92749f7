"""Generic realized-P/L statement import.

Older flex-style reports list one closing row per trade with the realized P/L already
computed. The header may sit below a few preamble lines, so it is located by content.
"""

from __future__ import annotations

import structlog

from broker_recon.config import ReconConfig, get_config
from broker_recon.constants import (
    REALIZED_EXPORT_COLUMNS,
    REALIZED_HEADER_DATE_KEYWORDS,
    REALIZED_HEADER_SYMBOL_KEYWORDS,
)
from broker_recon.diagnostics import Diagnostics, SkipReason
from broker_recon.parsing import parse_numbered_rows, resolve_columns
from broker_recon.trades.models import DayEntry, PnlSource, Strategy, Trade

logger = structlog.get_logger()


def _is_header(row: list[str]) -> bool:
    line = " ".join(row).casefold()
    return any(word in line for word in REALIZED_HEADER_DATE_KEYWORDS) and any(
        word in line for word in REALIZED_HEADER_SYMBOL_KEYWORDS
    )


def _date_part(value: str) -> str:
    """'2026-02-06, 18:32:08' and '2026-02-06 18:32:08' both give '2026-02-06'."""
    head = value.split(",")[0].strip()
    return head.split(" ")[0] if " " in head else head


def parse_realized_csv(
    text: str,
    *,
    config: ReconConfig | None = None,
    diagnostics: Diagnostics | None = None,
) -> dict[str, DayEntry]:
    """
    Parse a realized-P/L report into finalized day entries.

    Each row with a non-zero P/L or fee becomes one day-trade. Day totals are the stated
    P/L less that day's fees, the same net meaning the FIFO matcher produces.

    Returns:
        Mapping of date -> DayEntry ordered by date; empty when no header row or no
        realized column is found.
    """
    config = config or get_config()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    rows = parse_numbered_rows(text)

    header_idx = next((idx for idx, (_, row) in enumerate(rows) if _is_header(row)), None)
    if header_idx is None:
        diagnostics.record(0, SkipReason.MISSING_COLUMNS, "no header row")
        return {}

    header_line, header = rows[header_idx]
    cols = resolve_columns(header, REALIZED_EXPORT_COLUMNS)
    if "realized" not in cols or "date" not in cols:
        missing = cols.missing(("date", "realized"))
        diagnostics.record(header_line, SkipReason.MISSING_COLUMNS, ", ".join(missing))
        return {}

    days: dict[str, DayEntry] = {}
    for line_number, row in rows[header_idx + 1 :]:
        if len(row) < len(header):
            diagnostics.record(line_number, SkipReason.TOO_FEW_FIELDS)
            continue
        day = _date_part(cols.value(row, "date"))
        if not day:
            diagnostics.record(line_number, SkipReason.MISSING_VALUE, "date")
            continue

        pnl = cols.number(row, "realized")
        fee = abs(cols.number(row, "commission"))
        if pnl == 0 and fee == 0:
            diagnostics.record(line_number, SkipReason.MISSING_VALUE, "realized")
            continue

        entry = days.get(day)
        if entry is None:
            entry = days[day] = DayEntry(date=day)
        entry.add_trade(
            Trade(
                instrument=cols.value(row, "symbol"),
                quantity=abs(cols.number(row, "quantity")),
                pnl=pnl,
                fee=fee,
                strategy=Strategy.DAY_TRADE.value,
                pnl_source=PnlSource.STATED,
            )
        )

    for entry in days.values():
        entry.finalize(broker_pnl_includes_fees=config.broker_pnl_includes_fees)

    logger.info("Parsed realized P/L report", days=len(days), skipped=len(diagnostics))
    return dict(sorted(days.items()))
