"""Trade execution export -> typed fill records."""

from __future__ import annotations

import math
from collections.abc import Sequence

import structlog

from broker_recon.constants import (
    BUY_SIDE_TOKENS,
    EXECUTION_COLUMNS,
    NOTIONAL_MULTIPLIER_ROOTS,
    NOTIONAL_MULTIPLIER_TOLERANCE,
    REQUIRED_EXECUTION_COLUMNS,
    SELL_SIDE_TOKENS,
)
from broker_recon.diagnostics import Diagnostics, SkipReason
from broker_recon.exceptions import MissingColumnsError
from broker_recon.parsing import ColumnMap, parse_numbered_rows, parse_timestamp, resolve_columns
from broker_recon.trades.instruments import (
    DEFAULT_INSTRUMENT_RULES,
    InstrumentRule,
    infer_instrument,
)
from broker_recon.trades.models import Execution, Side

logger = structlog.get_logger()


def parse_side(value: str) -> Side | None:
    """Read a textual side ("Buy", "SLD", "Verkauf"); None when unrecognized."""
    words = value.strip().casefold().split()
    if not words:
        return None
    if words[0] in BUY_SIDE_TOKENS:
        return Side.BUY
    if words[0] in SELL_SIDE_TOKENS:
        return Side.SELL
    return None


def _contract_symbol(root: str, raw_symbol: str) -> str:
    """'Mar20 '26' under root MES -> "MES Mar20 '26"; already-rooted text is kept."""
    upper = raw_symbol.upper()
    if upper == root or upper.startswith(f"{root} "):
        return raw_symbol
    return f"{root} {raw_symbol}"


def resolve_instrument(
    raw_symbol: str,
    description: str,
    *,
    price: float,
    quantity: float,
    net_amount: float,
    rules: Sequence[InstrumentRule] = DEFAULT_INSTRUMENT_RULES,
) -> tuple[str, float]:
    """
    Determine the FIFO symbol and contract multiplier for one fill.

    The instrument rule table decides when it recognizes the contract text, unless the
    row's notional (`|net| / (price * qty)`) contradicts the rule's point value, as for
    a stock whose ticker equals a futures root. Otherwise the multiplier is read off the
    notional. Futures symbols are the contract root followed by the raw contract text,
    so every expiry keeps its own queue and micro and standard contracts never merge.
    """
    notional_ratio: float | None = None
    if price > 0 and quantity > 0 and net_amount:
        notional_ratio = abs(net_amount) / (price * quantity)

    text = raw_symbol if description == raw_symbol else f"{raw_symbol} {description}"
    rule = infer_instrument(text, rules)
    if rule is not None:
        if notional_ratio is None or math.isclose(
            notional_ratio, rule.multiplier, rel_tol=NOTIONAL_MULTIPLIER_TOLERANCE
        ):
            return _contract_symbol(rule.symbol, raw_symbol), float(rule.multiplier)
        logger.debug(
            "Notional contradicts instrument rule",
            symbol=raw_symbol,
            rule=rule.symbol,
            notional_ratio=round(notional_ratio, 4),
        )

    multiplier = max(1, round(notional_ratio)) if notional_ratio else 1
    root = NOTIONAL_MULTIPLIER_ROOTS.get(multiplier)
    if root:
        return _contract_symbol(root, raw_symbol), float(multiplier)
    return raw_symbol, float(multiplier)


def _parse_execution_row(
    line_number: int,
    row: list[str],
    cols: ColumnMap,
    rules: Sequence[InstrumentRule],
    diagnostics: Diagnostics,
) -> Execution | None:
    raw_symbol = cols.value(row, "symbol")
    if not raw_symbol:
        diagnostics.record(line_number, SkipReason.MISSING_VALUE, "symbol")
        return None

    side = parse_side(cols.value(row, "side"))
    if side is None:
        diagnostics.record(line_number, SkipReason.UNKNOWN_SIDE, cols.value(row, "side"))
        return None

    quantity = abs(cols.number(row, "quantity"))
    if quantity == 0:
        diagnostics.record(line_number, SkipReason.ZERO_QUANTITY, raw_symbol)
        return None

    timestamp = parse_timestamp(cols.value(row, "time"))
    if timestamp is None:
        diagnostics.record(line_number, SkipReason.INVALID_TIMESTAMP, cols.value(row, "time"))
        return None

    price = cols.number(row, "price")
    description = cols.value(row, "description") or raw_symbol
    symbol, multiplier = resolve_instrument(
        raw_symbol,
        description,
        price=price,
        quantity=quantity,
        net_amount=cols.number(row, "net_amount"),
        rules=rules,
    )
    return Execution(
        symbol=symbol,
        contract_description=description,
        side=side,
        quantity=quantity,
        price=price,
        timestamp=timestamp,
        commission=abs(cols.number(row, "commission")),
        multiplier=multiplier,
        broker_pnl=cols.number(row, "realized"),
    )


def parse_executions(
    text: str,
    *,
    rules: Sequence[InstrumentRule] = DEFAULT_INSTRUMENT_RULES,
    diagnostics: Diagnostics | None = None,
) -> list[Execution]:
    """
    Parse a flat trade execution export into fills, in file order.

    The first row is the header. Symbol, side, price and time columns are required: if
    any is missing the whole file is rejected (empty list, warning logged) rather than
    producing partial financial data. Individual malformed rows are skipped.

    Args:
        text: Full export text.
        rules: Instrument rule table used for symbol/multiplier inference.
        diagnostics: Optional collector for skipped rows.

    Returns:
        Executions in input order (the matcher sorts them by time).
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    rows = parse_numbered_rows(text)
    if len(rows) < 2:
        diagnostics.record(0, SkipReason.TOO_FEW_FIELDS, "fewer than two rows")
        return []

    header_line, header = rows[0]
    cols = resolve_columns(header, EXECUTION_COLUMNS)
    try:
        cols.require(REQUIRED_EXECUTION_COLUMNS)
    except MissingColumnsError as e:
        logger.warning("Execution export is missing required columns", missing=e.missing)
        diagnostics.record(header_line, SkipReason.MISSING_COLUMNS, ", ".join(e.missing))
        return []

    executions: list[Execution] = []
    for line_number, row in rows[1:]:
        execution = _parse_execution_row(line_number, row, cols, rules, diagnostics)
        if execution is not None:
            executions.append(execution)

    logger.info("Parsed executions", count=len(executions), skipped=len(diagnostics))
    return executions
