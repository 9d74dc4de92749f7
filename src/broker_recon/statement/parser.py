"""Multi-section activity statement parser.

Activity statements interleave several tables in one file. Every row starts with the
section title and a row-type marker:

    Open Positions,Header,Asset Category,Currency,Symbol,Quantity,...
    Open Positions,Data,Stocks,USD,AAPL,10,...
    Cash Report,Header,Currency Summary,Currency,Total,...

A `Header` row switches the active column layout until the next `Header`; `Data` rows
are routed to the handler for the active section kind. Rows that do not fit are skipped
(and recorded when a `Diagnostics` collector is passed), never fatal.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

import structlog

from broker_recon.config import ReconConfig, get_config
from broker_recon.constants import (
    CASH_COLUMN_EXCLUSIONS,
    CASH_COLUMNS,
    DATA_MARKER,
    DIVIDEND_COLUMNS,
    DIVIDEND_KEYWORDS,
    ENDING_BALANCE_KEYWORDS,
    FOREX_COLUMNS,
    HEADER_MARKER,
    PERIOD_FIELD_KEYWORDS,
    POSITION_COLUMN_EXCLUSIONS,
    POSITION_COLUMNS,
    REALIZED_COLUMN_EXCLUSIONS,
    REALIZED_COLUMNS,
    STATEMENT_COLUMNS,
    WITHHOLDING_TAX_KEYWORDS,
)
from broker_recon.diagnostics import Diagnostics, SkipReason
from broker_recon.parsing import ColumnMap, parse_numbered_rows, resolve_columns
from broker_recon.statement.models import PortfolioPosition, PortfolioSnapshot
from broker_recon.statement.sections import SectionKind, classify_section

logger = structlog.get_logger()

_NO_EXCLUSIONS: dict[str, tuple[str, ...]] = {}

_SECTION_COLUMNS: dict[
    SectionKind, tuple[Mapping[str, Sequence[str]], Mapping[str, Sequence[str]]]
] = {
    SectionKind.STATEMENT: (STATEMENT_COLUMNS, _NO_EXCLUSIONS),
    SectionKind.OPEN_POSITIONS: (POSITION_COLUMNS, POSITION_COLUMN_EXCLUSIONS),
    SectionKind.REALIZED_PERFORMANCE: (REALIZED_COLUMNS, REALIZED_COLUMN_EXCLUSIONS),
    SectionKind.CASH_REPORT: (CASH_COLUMNS, CASH_COLUMN_EXCLUSIONS),
    SectionKind.FOREX: (FOREX_COLUMNS, _NO_EXCLUSIONS),
    SectionKind.DIVIDENDS: (DIVIDEND_COLUMNS, _NO_EXCLUSIONS),
    SectionKind.WITHHOLDING_TAX: (DIVIDEND_COLUMNS, _NO_EXCLUSIONS),
}


def _is_currency_code(value: str) -> bool:
    return len(value) == 3 and value.isalpha()


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    folded = text.casefold()
    return any(keyword in folded for keyword in keywords)


class _StatementBuilder:
    """Per-call parser state: the active section and the snapshot being filled."""

    def __init__(
        self,
        config: ReconConfig,
        diagnostics: Diagnostics,
        existing_rates: Mapping[str, float] | None,
    ) -> None:
        self.config = config
        self.diagnostics = diagnostics
        self.snapshot = PortfolioSnapshot(exchange_rates=dict(existing_rates or {}))
        self._section_name: str | None = None
        self._kind = SectionKind.UNKNOWN
        self._columns = ColumnMap({})
        self._handlers: dict[SectionKind, Callable[[int, list[str]], None]] = {
            SectionKind.STATEMENT: self._statement_info,
            SectionKind.OPEN_POSITIONS: self._open_position,
            SectionKind.REALIZED_PERFORMANCE: self._realized_performance,
            SectionKind.CASH_REPORT: self._cash_balance,
            SectionKind.FOREX: self._forex_rate,
            SectionKind.DIVIDENDS: self._dividend_or_tax,
            SectionKind.WITHHOLDING_TAX: self._dividend_or_tax,
        }

    @property
    def base(self) -> str:
        return self.config.base_currency

    def feed(self, line_number: int, row: list[str]) -> None:
        if len(row) < 3:
            self.diagnostics.record(line_number, SkipReason.TOO_FEW_FIELDS)
            return

        marker = row[1]
        if marker == HEADER_MARKER:
            self._start_section(row[0], row[2:])
            return
        if marker != DATA_MARKER:
            self.diagnostics.record(line_number, SkipReason.UNSUPPORTED_ROW_TYPE, marker)
            return

        if self._section_name is None or row[0] != self._section_name:
            self.diagnostics.record(line_number, SkipReason.NO_ACTIVE_SECTION, row[0])
            return

        handler = self._handlers.get(self._kind)
        if handler is None:
            self.diagnostics.record(line_number, SkipReason.UNRECOGNIZED_SECTION, row[0])
            return
        handler(line_number, row[2:])

    def finish(self) -> PortfolioSnapshot:
        self.snapshot.recompute_summary(self.base)
        return self.snapshot

    def _start_section(self, name: str, header: list[str]) -> None:
        self._section_name = name
        self._kind = classify_section(name)
        fields, excluded = _SECTION_COLUMNS.get(self._kind, ({}, _NO_EXCLUSIONS))
        self._columns = resolve_columns(header, fields, excluded=excluded)
        logger.debug("Statement section", section=name, kind=self._kind.value)

    def _is_excluded_asset(self, asset_class: str, description: str) -> bool:
        if _contains_any(f"{asset_class} {description}", self.config.excluded_asset_keywords):
            return True
        if asset_class.strip() and not _contains_any(
            asset_class, self.config.allowed_asset_keywords
        ):
            return True
        return False

    def _position(self, symbol: str) -> PortfolioPosition:
        position = self.snapshot.positions.get(symbol)
        if position is None:
            position = PortfolioPosition(symbol=symbol, currency=self.base)
            self.snapshot.positions[symbol] = position
        return position

    def _statement_info(self, line_number: int, fields: list[str]) -> None:
        name = self._columns.value(fields, "field_name")
        if _contains_any(name, PERIOD_FIELD_KEYWORDS):
            self.snapshot.period = self._columns.value(fields, "field_value")

    def _open_position(self, line_number: int, fields: list[str]) -> None:
        cols = self._columns
        discriminator = cols.value(fields, "discriminator")
        if discriminator and discriminator.casefold() != "summary":
            self.diagnostics.record(line_number, SkipReason.UNSUPPORTED_ROW_TYPE, discriminator)
            return

        asset_class = cols.value(fields, "asset_class")
        description = cols.value(fields, "description")
        if self._is_excluded_asset(asset_class, description):
            self.diagnostics.record(line_number, SkipReason.EXCLUDED_ASSET_CLASS, asset_class)
            return

        symbol = cols.value(fields, "symbol")
        if not symbol:
            self.diagnostics.record(line_number, SkipReason.MISSING_VALUE, "symbol")
            return

        position = self._position(symbol)
        position.currency = cols.value(fields, "currency", self.base).upper() or self.base
        position.quantity = cols.number(fields, "quantity")
        position.cost_basis = cols.number(fields, "cost_basis")
        position.close_price = cols.number(fields, "close_price")
        position.market_value = cols.number(fields, "market_value")
        position.unrealized_pnl = cols.number(fields, "unrealized")

    def _realized_performance(self, line_number: int, fields: list[str]) -> None:
        cols = self._columns
        asset_class = cols.value(fields, "asset_class")
        description = cols.value(fields, "description")
        if self._is_excluded_asset(asset_class, description):
            self.diagnostics.record(line_number, SkipReason.EXCLUDED_ASSET_CLASS, asset_class)
            return

        symbol = cols.value(fields, "symbol")
        if not symbol:
            self.diagnostics.record(line_number, SkipReason.MISSING_VALUE, "symbol")
            return
        if symbol.casefold().startswith("total"):
            self.diagnostics.record(line_number, SkipReason.TOTAL_ROW, symbol)
            return

        if "realized_total" in cols:
            realized = cols.number(fields, "realized_total")
        else:
            realized = cols.number(fields, "realized_short_term") + cols.number(
                fields, "realized_long_term"
            )
        self._position(symbol).realized_pnl = realized

    def _cash_balance(self, line_number: int, fields: list[str]) -> None:
        cols = self._columns
        description = cols.value(fields, "description")
        if not _contains_any(description, ENDING_BALANCE_KEYWORDS):
            self.diagnostics.record(line_number, SkipReason.NOT_ENDING_BALANCE, description)
            return

        currency = cols.value(fields, "currency").upper()
        amount = cols.number(fields, "total")
        if not _is_currency_code(currency) or amount == 0:
            self.diagnostics.record(line_number, SkipReason.MISSING_VALUE, currency)
            return

        self.snapshot.cash[currency] = amount
        if currency != self.base:
            self.snapshot.exchange_rates.setdefault(f"{currency}_{self.base}", 0.0)

    def _forex_rate(self, line_number: int, fields: list[str]) -> None:
        cols = self._columns
        description = cols.value(fields, "description").upper()
        currency = (
            description
            if _is_currency_code(description)
            else cols.value(fields, "currency").upper()
        )
        rate = cols.number(fields, "close_price")
        if not _is_currency_code(currency) or currency == self.base or rate <= 0:
            self.diagnostics.record(line_number, SkipReason.MISSING_VALUE, currency)
            return
        self.snapshot.exchange_rates[f"{currency}_{self.base}"] = rate

    def _dividend_or_tax(self, line_number: int, fields: list[str]) -> None:
        cols = self._columns
        currency = cols.value(fields, "currency")
        if currency.casefold().startswith("total"):
            self.diagnostics.record(line_number, SkipReason.TOTAL_ROW, currency)
            return

        description = cols.value(fields, "description")
        amount = cols.number(fields, "amount")
        if self._kind is SectionKind.WITHHOLDING_TAX or _contains_any(
            description, WITHHOLDING_TAX_KEYWORDS
        ):
            self.snapshot.withholding_tax += abs(amount)
        elif _contains_any(description, DIVIDEND_KEYWORDS):
            if amount > 0:
                self.snapshot.dividends += amount
        else:
            self.diagnostics.record(line_number, SkipReason.MISSING_VALUE, description)


def parse_statement(
    text: str,
    existing_rates: Mapping[str, float] | None = None,
    *,
    config: ReconConfig | None = None,
    diagnostics: Diagnostics | None = None,
) -> PortfolioSnapshot:
    """
    Parse a multi-section activity statement into a portfolio snapshot.

    Args:
        text: Full statement text.
        existing_rates: Rates already known to the caller ("EUR_USD" -> 1.08). They are
            kept unless a forex row in this statement supplies a fresh value.
        config: Reporting currency and asset filters (defaults to the global config).
        diagnostics: Optional collector for skipped rows.

    Returns:
        Snapshot with positions, cash, rates and a recomputed summary. Inputs with fewer
        than two rows produce an empty snapshot carrying only `existing_rates`.
    """
    config = config or get_config()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    builder = _StatementBuilder(config, diagnostics, existing_rates)

    rows = parse_numbered_rows(text)
    if len(rows) < 2:
        diagnostics.record(0, SkipReason.TOO_FEW_FIELDS, "fewer than two rows")
        return builder.snapshot

    for line_number, row in rows:
        builder.feed(line_number, row)

    snapshot = builder.finish()
    logger.info(
        "Parsed statement",
        positions=len(snapshot.positions),
        currencies=len(snapshot.cash),
        total_value=round(snapshot.summary.total_value, 2),
        skipped=len(diagnostics),
    )
    return snapshot
