"""Journal backup import and export.

The journal backup is this tool's own per-day layout: one row per date with the stated
net total, fees, a free-text note and a `details_json` cell holding the day's trades.
"""

from __future__ import annotations

import csv
import io
import json
from datetime import date, datetime, time
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from broker_recon.constants import JOURNAL_COLUMNS, JOURNAL_HEADER
from broker_recon.diagnostics import Diagnostics, SkipReason
from broker_recon.parsing import parse_numbered_rows, resolve_columns
from broker_recon.trades.models import DayEntry, PnlSource, Strategy, Trade

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = structlog.get_logger()


class JournalTrade(BaseModel):
    """One trade object inside a `details_json` cell."""

    model_config = ConfigDict(frozen=True)

    inst: str
    qty: float = 0.0
    pnl: float
    fee: float = 0.0
    start: str = "00:00"
    """Opening time as HH:MM."""

    end: str = "00:00"
    tag: str = ""
    strategy: str = Field(default=Strategy.DAY_TRADE.value)


_TRADES_ADAPTER = TypeAdapter(list[JournalTrade])


def _combine(day: str, hhmm: str) -> datetime | None:
    """Attach an HH:MM clock time to an ISO date; None when either part does not parse."""
    try:
        return datetime.combine(date.fromisoformat(day), time.fromisoformat(hhmm))
    except ValueError:
        return None


def _to_trade(day: str, item: JournalTrade) -> Trade:
    return Trade(
        instrument=item.inst,
        quantity=item.qty,
        pnl=item.pnl,
        fee=item.fee,
        start_time=_combine(day, item.start),
        end_time=_combine(day, item.end),
        strategy=item.strategy,
        tag=item.tag,
        pnl_source=PnlSource.STATED,
    )


def _parse_details(
    line_number: int, day: str, raw: str, diagnostics: Diagnostics
) -> list[Trade]:
    if not raw:
        return []
    try:
        items = _TRADES_ADAPTER.validate_json(raw)
    except ValidationError as e:
        diagnostics.record(line_number, SkipReason.INVALID_JSON, f"{e.error_count()} errors")
        return []
    return [_to_trade(day, item) for item in items]


def parse_journal_csv(
    text: str,
    *,
    diagnostics: Diagnostics | None = None,
) -> dict[str, DayEntry]:
    """
    Parse a journal backup into day entries.

    The stated total is already net of fees, so entries come back finalized and their
    totals are kept as written. A day whose `details_json` does not validate keeps its
    total with an empty trade list.

    Args:
        text: Full backup text.
        diagnostics: Optional collector for skipped rows and invalid trade lists.

    Returns:
        Mapping of date -> DayEntry.
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    rows = parse_numbered_rows(text, doubled_quote_escape=True)
    if len(rows) < 2:
        return {}

    cols = resolve_columns(rows[0][1], JOURNAL_COLUMNS)
    days: dict[str, DayEntry] = {}
    for line_number, row in rows[1:]:
        if len(row) < 2:
            diagnostics.record(line_number, SkipReason.TOO_FEW_FIELDS)
            continue
        day = cols.value(row, "date")
        if not day:
            diagnostics.record(line_number, SkipReason.MISSING_VALUE, "date")
            continue

        trades = _parse_details(line_number, day, cols.value(row, "details"), diagnostics)
        fees = (
            abs(cols.number(row, "fees"))
            if "fees" in cols
            else sum(trade.fee for trade in trades)
        )
        days[day] = DayEntry(
            date=day,
            trades=trades,
            total=cols.number(row, "total"),
            fees=fees,
            note=cols.value(row, "note"),
            finalized=True,
        )

    logger.info("Parsed journal backup", days=len(days), skipped=len(diagnostics))
    return days


def _trade_payload(trade: Trade) -> dict[str, object]:
    return {
        "inst": trade.instrument,
        "qty": trade.quantity,
        "pnl": trade.pnl,
        "fee": trade.fee,
        "start": trade.start,
        "end": trade.end,
        "tag": trade.tag,
        "strategy": trade.strategy,
    }


def dump_journal_csv(days: Mapping[str, DayEntry]) -> str:
    """
    Write day entries in the journal backup layout.

    Every field is quoted so that commas and semicolons in notes or trade details stay
    inside their cell. Line breaks in notes are flattened to spaces.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(JOURNAL_HEADER)
    for day, entry in sorted(days.items()):
        writer.writerow(
            [
                day,
                f"{entry.total:.6f}",
                f"{entry.fees:.6f}",
                " ".join(entry.note.split()),
                json.dumps([_trade_payload(trade) for trade in entry.trades]),
            ]
        )
    return buffer.getvalue()

