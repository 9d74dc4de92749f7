"""Statement section kinds and the title translation table."""

from __future__ import annotations

from enum import Enum


class SectionKind(str, Enum):
    """Statement sections the parser understands."""

    STATEMENT = "statement"
    OPEN_POSITIONS = "open_positions"
    REALIZED_PERFORMANCE = "realized_performance"
    CASH_REPORT = "cash_report"
    FOREX = "forex"
    DIVIDENDS = "dividends"
    WITHHOLDING_TAX = "withholding_tax"
    UNKNOWN = "unknown"


# Checked in order; the first entry whose keyword occurs in the title wins.
# Accrual sections mention dividends but carry no cash, so they are claimed first.
SECTION_TITLES: tuple[tuple[SectionKind, tuple[str, ...]], ...] = (
    (SectionKind.UNKNOWN, ("accrual", "abgrenzung")),
    (SectionKind.STATEMENT, ("statement", "kontoauszug")),
    (SectionKind.OPEN_POSITIONS, ("open positions", "offene positionen")),
    (
        SectionKind.REALIZED_PERFORMANCE,
        ("realized & unrealized", "realized and unrealized", "realisierten", "realized"),
    ),
    (SectionKind.CASH_REPORT, ("cash report", "cash-bericht", "cashbericht", "barbericht")),
    (SectionKind.FOREX, ("forex", "devisen", "exchange rate", "wechselkurs")),
    (SectionKind.WITHHOLDING_TAX, ("withholding tax", "quellensteuer")),
    (SectionKind.DIVIDENDS, ("dividend", "dividende")),
)


def classify_section(title: str) -> SectionKind:
    """Map a raw section title (any supported language) to its kind."""
    normalized = " ".join(title.casefold().split())
    for kind, keywords in SECTION_TITLES:
        if any(keyword in normalized for keyword in keywords):
            return kind
    return SectionKind.UNKNOWN
