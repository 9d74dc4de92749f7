"""Centralized policy constants for broker statement reconciliation.

Broker exports are bilingual (German/English) and loosely structured, so most parsing
decisions come down to keyword tables. Keeping them here:

- Keeps the synonym lists for one logical field in one place
- Makes adding a new export variant a data change rather than a parser change
- Keeps the parsers free of scattered string literals

All keywords are matched as case-folded substrings of a header or description token.
"""

from __future__ import annotations

# =============================================================================
# Reporting Defaults
# =============================================================================

# Reporting currency for portfolio summaries.
#
# Used by:
# - config.py: ReconConfig.base_currency default
# - statement/parser.py: rate keys are built as "{ccy}_{base}"
DEFAULT_BASE_CURRENCY: str = "USD"

# Residual quantity below which an open lot counts as fully consumed.
#
# Used by:
# - config.py: ReconConfig.lot_epsilon default
# - trades/_fifo.py: lot removal after proration
#
# Repeated proration of fractional fills leaves float residue like 1e-15.
DEFAULT_LOT_EPSILON: float = 1e-9

# =============================================================================
# Asset Class Filtering
# =============================================================================

# Rows whose asset class or description contains one of these are dropped.
#
# Used by:
# - statement/parser.py: open positions and realized performance sections
#
# "option" also covers the German "Optionsschein".
EXCLUDED_ASSET_KEYWORDS: tuple[str, ...] = ("future", "option", "warrant")

# A non-blank asset class must contain one of these to be kept.
#
# Used by:
# - statement/parser.py: open positions and realized performance sections
ALLOWED_ASSET_KEYWORDS: tuple[str, ...] = ("stock", "etf", "fund", "aktie", "fonds")

# =============================================================================
# Statement Row Markers
# =============================================================================

# Second field of every statement row.
HEADER_MARKER: str = "Header"
DATA_MARKER: str = "Data"

# Description phrasings that identify the closing cash balance in a cash report.
#
# Used by:
# - statement/parser.py: cash report handler
#
# "Ending Settled Cash" is deliberately absent: only the trade-date balance is kept.
ENDING_BALANCE_KEYWORDS: tuple[str, ...] = (
    "ending cash",
    "endbarsaldo",
    "end-barsaldo",
    "schlussbarsaldo",
    "endsaldo",
    "barsaldo am ende",
)

# Description fragments used by dividend and withholding tax rows.
DIVIDEND_KEYWORDS: tuple[str, ...] = ("dividend", "dividende", "ausschüttung")
WITHHOLDING_TAX_KEYWORDS: tuple[str, ...] = ("withholding tax", "quellensteuer")

# Field names in the statement header section that carry the reporting period.
PERIOD_FIELD_KEYWORDS: tuple[str, ...] = ("period", "zeitraum")

# =============================================================================
# Section Column Synonyms
# =============================================================================
#
# Each table maps a logical field to the header keywords that may name it. The first
# header column (left to right) containing any keyword wins.

STATEMENT_COLUMNS: dict[str, tuple[str, ...]] = {
    "field_name": ("field name", "feldname", "name"),
    "field_value": ("field value", "feldwert", "wert", "value"),
}

POSITION_COLUMNS: dict[str, tuple[str, ...]] = {
    "discriminator": ("datadiscriminator", "data discriminator"),
    "asset_class": ("asset category", "asset class", "vermögenswertkategorie", "anlageklasse"),
    "currency": ("currency", "währung", "waehrung"),
    "symbol": ("symbol",),
    "description": ("description", "beschreibung"),
    "quantity": ("quantity", "menge", "anzahl"),
    "cost_basis": ("cost basis", "kostenbasis", "einstandswert"),
    "close_price": ("close price", "schlusskurs"),
    "market_value": ("value", "marktwert", "wert"),
    "unrealized": ("unrealized", "unrealisiert"),
}

# German cost basis ("Einstandswert") and asset class ("Vermögenswertkategorie") also
# contain "wert".
POSITION_COLUMN_EXCLUSIONS: dict[str, tuple[str, ...]] = {
    "market_value": ("einstand", "kosten", "cost", "kategorie"),
}

REALIZED_COLUMNS: dict[str, tuple[str, ...]] = {
    "asset_class": POSITION_COLUMNS["asset_class"],
    "symbol": ("symbol",),
    "description": ("description", "beschreibung"),
    "realized_total": ("realized total", "realisiert gesamt", "realisierter gesamt"),
    "realized_short_term": ("realized s/t", "realisiert kurzfristig", "realisierter kurzfristig"),
    "realized_long_term": ("realized l/t", "realisiert langfristig", "realisierter langfristig"),
}

# "Unrealized Total" contains "realized total"; these keep the realized fields honest.
REALIZED_COLUMN_EXCLUSIONS: dict[str, tuple[str, ...]] = {
    "realized_total": ("unrealized", "unrealisiert"),
    "realized_short_term": ("unrealized", "unrealisiert"),
    "realized_long_term": ("unrealized", "unrealisiert"),
}

CASH_COLUMNS: dict[str, tuple[str, ...]] = {
    "description": ("currency summary", "description", "währungsübersicht", "beschreibung"),
    "currency": ("currency", "währung", "waehrung"),
    "total": ("total", "gesamt", "summe"),
}

# The cash report names its description column "Currency Summary".
CASH_COLUMN_EXCLUSIONS: dict[str, tuple[str, ...]] = {
    "currency": ("summary", "übersicht"),
}

FOREX_COLUMNS: dict[str, tuple[str, ...]] = {
    "currency": ("currency", "währung", "waehrung"),
    "description": ("description", "beschreibung"),
    "close_price": ("close price", "schlusskurs", "rate", "wechselkurs"),
}

DIVIDEND_COLUMNS: dict[str, tuple[str, ...]] = {
    "currency": ("currency", "währung", "waehrung"),
    "description": ("description", "beschreibung"),
    "amount": ("amount", "betrag"),
}

# =============================================================================
# Trade Execution Export Columns
# =============================================================================

EXECUTION_COLUMNS: dict[str, tuple[str, ...]] = {
    "symbol": ("symbol", "financial instrument", "finanzinstrument", "instrument"),
    "description": ("description", "beschreibung", "contract"),
    "side": ("side", "buy/sell", "action", "kauf/verkauf"),
    "quantity": ("qty", "quantity", "menge"),
    "price": ("fill price", "price", "preis"),
    "time": ("time", "zeit", "datum"),
    "net_amount": ("net amount", "netamount", "proceeds", "erlös"),
    "commission": ("commission", "comm", "fee", "gebühr"),
    "realized": ("realized p/l", "fifo p/l realized", "realisierter g&v", "realisierte g&v"),
}

# Without these the execution parser returns nothing rather than guess.
REQUIRED_EXECUTION_COLUMNS: tuple[str, ...] = ("symbol", "side", "price", "time")

BUY_SIDE_TOKENS: frozenset[str] = frozenset({"buy", "b", "bot", "bought", "kauf", "k"})
SELL_SIDE_TOKENS: frozenset[str] = frozenset({"sell", "s", "sld", "sold", "verkauf", "v"})

# =============================================================================
# Futures Point Values
# =============================================================================

# Multiplier -> contract root, for contracts identified only by their notional.
#
# Used by:
# - trades/executions.py: multiplier inference when no instrument rule matches
NOTIONAL_MULTIPLIER_ROOTS: dict[int, str] = {
    50: "ES",
    5: "MES",
    20: "NQ",
    2: "MNQ",
}

# Relative gap between a row's notional ratio and a rule's point value above which the
# notional wins (a stock ticker that happens to equal a futures root).
#
# Used by:
# - trades/executions.py: instrument rule check against Net Amount
NOTIONAL_MULTIPLIER_TOLERANCE = 0.1

# =============================================================================
# Journal Backup Columns
# =============================================================================

# Used by:
# - trades/journal.py: journal backup import and export
# - trades/formats.py: any of JOURNAL_MARKERS in the header selects the journal format
JOURNAL_COLUMNS: dict[str, tuple[str, ...]] = {
    "date": ("datum", "date"),
    "total": ("pnl", "total"),
    "fees": ("fees", "gebühren", "gebuehren"),
    "note": ("notiz", "note"),
    "details": ("details_json",),
}

JOURNAL_MARKERS: tuple[str, ...] = ("details_json", "notiz")

# Header written by dump_journal_csv.
JOURNAL_HEADER: tuple[str, ...] = ("Datum", "PnL", "Fees", "Notiz", "details_json")

# =============================================================================
# Generic Realized P/L Export Columns
# =============================================================================

# Used by:
# - trades/realized.py: header row detection and column resolution
REALIZED_EXPORT_COLUMNS: dict[str, tuple[str, ...]] = {
    "date": ("date/time", "datum/zeit", "date", "datum", "time", "zeit"),
    "symbol": ("symbol", "description", "beschreibung"),
    "quantity": ("quantity", "qty", "menge"),
    "commission": ("comm", "fee", "gebühr"),
    "realized": ("realized", "realisiert", "p/l", "g&v"),
}

REALIZED_HEADER_DATE_KEYWORDS: tuple[str, ...] = ("date", "time", "datum", "zeit")
REALIZED_HEADER_SYMBOL_KEYWORDS: tuple[str, ...] = ("symbol", "description", "beschreibung")

# =============================================================================
# Payslip Columns
# =============================================================================

# Used by:
# - salary.py: payslip import
SALARY_COLUMNS: dict[str, tuple[str, ...]] = {
    "year": ("jahr", "year"),
    "month": ("monat", "month"),
    "base_salary": ("monatslohn", "grundlohn", "base salary"),
    "family_allowance": ("familienzulage", "kinderzulage", "fazu"),
    "flat_expenses": ("pauschalspesen", "spesen", "expenses"),
    "add_back": ("aufrechnung", "add-back"),
    "gross": ("brutto", "gross"),
    "ahv": ("ahv",),
    "alv": ("alv",),
    "social_fund": ("sozialfond", "ktg", "social fund"),
    "bvg": ("bvg", "pension"),
    "withholding_tax": ("quellensteuer", "withholding"),
    "deductions": ("abzüge", "abzuege", "deductions"),
    "net": ("netto", "net"),
    "correction": ("korrektur", "correction"),
    "payout": ("auszahlung", "payout"),
    "comment": ("kommentar", "comment"),
}

# "Monatslohn" contains "monat".
SALARY_COLUMN_EXCLUSIONS: dict[str, tuple[str, ...]] = {
    "month": ("lohn", "salary"),
    "year": ("jahres",),
}

# Lower-case month names (German and English, full and abbreviated) -> month number.
MONTH_NAMES: dict[str, int] = {
    "januar": 1, "january": 1, "jan": 1,
    "februar": 2, "february": 2, "feb": 2,
    "märz": 3, "maerz": 3, "march": 3, "mär": 3, "mar": 3,
    "april": 4, "apr": 4,
    "mai": 5, "may": 5,
    "juni": 6, "june": 6, "jun": 6,
    "juli": 7, "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "oktober": 10, "october": 10, "okt": 10, "oct": 10,
    "november": 11, "nov": 11,
    "dezember": 12, "december": 12, "dez": 12, "dec": 12,
}  # fmt: skip
