"""Monthly payslip import.

Payslip spreadsheets are exported with German or English headers. Every amount column is
optional; the year and month columns identify the row.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from broker_recon.constants import MONTH_NAMES, SALARY_COLUMN_EXCLUSIONS, SALARY_COLUMNS
from broker_recon.diagnostics import Diagnostics, SkipReason
from broker_recon.parsing import ColumnMap, parse_number, parse_numbered_rows, resolve_columns

logger = structlog.get_logger()

_DEDUCTION_FIELDS = ("ahv", "alv", "social_fund", "bvg", "withholding_tax")
_GROSS_FIELDS = ("base_salary", "family_allowance", "flat_expenses", "add_back")


@dataclass
class SalaryEntry:
    """One month's payslip. Deductions are positive amounts."""

    base_salary: float = 0.0
    family_allowance: float = 0.0
    flat_expenses: float = 0.0
    add_back: float = 0.0
    gross: float = 0.0
    ahv: float = 0.0
    alv: float = 0.0
    social_fund: float = 0.0
    bvg: float = 0.0
    withholding_tax: float = 0.0
    deductions: float = 0.0
    net: float = 0.0
    correction: float = 0.0
    payout: float = 0.0
    comment: str = ""


def parse_month(value: str) -> int | None:
    """Month number from "3", "03", "März" or "March"; None when unrecognized."""
    text = value.strip().casefold().rstrip(".")
    if not text:
        return None
    if text.isdigit():
        month = int(text)
        return month if 1 <= month <= 12 else None
    return MONTH_NAMES.get(text)


def _parse_year(value: str) -> int | None:
    number = parse_number(value)
    if number < 1900 or number != int(number):
        return None
    return int(number)


def _build_entry(row: list[str], cols: ColumnMap) -> SalaryEntry:
    amounts = {
        name: abs(cols.number(row, name)) if name in _DEDUCTION_FIELDS else cols.number(row, name)
        for name in SALARY_COLUMNS
        if name not in ("year", "month", "comment")
    }
    entry = SalaryEntry(**amounts, comment=cols.value(row, "comment"))

    if "gross" not in cols:
        entry.gross = sum(getattr(entry, name) for name in _GROSS_FIELDS)
    if "deductions" not in cols:
        entry.deductions = sum(getattr(entry, name) for name in _DEDUCTION_FIELDS)
    else:
        entry.deductions = abs(entry.deductions)
    if "net" not in cols:
        entry.net = entry.gross - entry.deductions
    if "payout" not in cols:
        entry.payout = entry.net + entry.correction
    return entry


def parse_salary_csv(
    text: str,
    *,
    diagnostics: Diagnostics | None = None,
) -> dict[str, dict[str, SalaryEntry]]:
    """
    Parse a payslip CSV.

    Args:
        text: Full CSV text; the first row is the header.
        diagnostics: Optional collector for skipped rows.

    Returns:
        Mapping of year -> two-digit month ("01".."12") -> SalaryEntry. A later row for
        the same month replaces an earlier one.
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    rows = parse_numbered_rows(text)
    if len(rows) < 2:
        return {}

    header_line, header = rows[0]
    cols = resolve_columns(header, SALARY_COLUMNS, excluded=SALARY_COLUMN_EXCLUSIONS)
    if "year" not in cols or "month" not in cols:
        missing = cols.missing(("year", "month"))
        diagnostics.record(header_line, SkipReason.MISSING_COLUMNS, ", ".join(missing))
        return {}

    result: dict[str, dict[str, SalaryEntry]] = {}
    for line_number, row in rows[1:]:
        year = _parse_year(cols.value(row, "year"))
        month = parse_month(cols.value(row, "month"))
        if year is None or month is None:
            diagnostics.record(line_number, SkipReason.MISSING_VALUE, "year/month")
            continue
        result.setdefault(str(year), {})[f"{month:02d}"] = _build_entry(row, cols)

    logger.info(
        "Parsed payslips",
        months=sum(len(months) for months in result.values()),
        skipped=len(diagnostics),
    )
    return result
