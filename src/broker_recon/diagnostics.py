"""Skip diagnostics for resilient parsing.

Parsers never fail on a malformed row; they skip it. Passing a `Diagnostics` instance
to a parser records each skip with its line number and reason so callers can tell
footer noise apart from rows that may have carried data.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

import structlog

logger = structlog.get_logger()


class SkipReason(str, Enum):
    """Why a row was not turned into a record."""

    TOO_FEW_FIELDS = "too_few_fields"
    NO_ACTIVE_SECTION = "no_active_section"
    UNRECOGNIZED_SECTION = "unrecognized_section"
    UNSUPPORTED_ROW_TYPE = "unsupported_row_type"
    EXCLUDED_ASSET_CLASS = "excluded_asset_class"
    MISSING_VALUE = "missing_value"
    TOTAL_ROW = "total_row"
    NOT_ENDING_BALANCE = "not_ending_balance"
    MISSING_COLUMNS = "missing_columns"
    UNKNOWN_SIDE = "unknown_side"
    ZERO_QUANTITY = "zero_quantity"
    INVALID_TIMESTAMP = "invalid_timestamp"
    INVALID_JSON = "invalid_json"


@dataclass(frozen=True)
class SkippedRow:
    """One skipped input row."""

    line_number: int
    """1-based physical line of the input, blank lines included (0 = whole file)."""

    reason: SkipReason
    detail: str = ""


@dataclass
class Diagnostics:
    """Collects skipped rows for one or more parse calls."""

    skipped: list[SkippedRow] = field(default_factory=list)

    def record(self, line_number: int, reason: SkipReason, detail: str = "") -> None:
        self.skipped.append(SkippedRow(line_number=line_number, reason=reason, detail=detail))
        logger.debug("Skipped row", line=line_number, reason=reason.value, detail=detail)

    def count(self, reason: SkipReason | None = None) -> int:
        if reason is None:
            return len(self.skipped)
        return sum(1 for row in self.skipped if row.reason is reason)

    def by_reason(self) -> Counter[SkipReason]:
        return Counter(row.reason for row in self.skipped)

    def __len__(self) -> int:
        return len(self.skipped)
