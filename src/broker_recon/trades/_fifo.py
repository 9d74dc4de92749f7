"""FIFO (First-In-First-Out) round-trip matching and daily aggregation.

Executions are replayed in time order against two FIFO queues per symbol: open longs
and open shorts. A fill first closes inventory on the opposite side; whatever it cannot
close opens (or extends) a position on its own side.

Fees and P/L are handled as:
- A match's fee is each side's commission prorated by the share of that fill consumed.
- A broker-reported realized P/L on the closing fill wins and is prorated by matched
  quantity. Otherwise P/L is computed from prices and the contract multiplier.
- Day totals accumulate gross P/L per match; fees are subtracted once per day after
  the whole stream has been matched.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from broker_recon.config import ReconConfig, get_config
from broker_recon.trades.models import (
    DayEntry,
    Execution,
    OpenLot,
    PnlSource,
    Side,
    Strategy,
    Trade,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = structlog.get_logger()


@dataclass
class MatchResult:
    """Matched trades by closing date plus the inventory left open."""

    days: dict[str, DayEntry] = field(default_factory=dict)
    open_longs: dict[str, deque[OpenLot]] = field(default_factory=dict)
    open_shorts: dict[str, deque[OpenLot]] = field(default_factory=dict)

    @property
    def trades(self) -> list[Trade]:
        return [trade for day in self.days.values() for trade in day.trades]

    def open_quantity(self, symbol: str) -> float:
        """Net open quantity for `symbol`: positive long, negative short."""
        longs = sum(lot.quantity for lot in self.open_longs.get(symbol, ()))
        shorts = sum(lot.quantity for lot in self.open_shorts.get(symbol, ()))
        return longs - shorts


def close_lot(lot: OpenLot, closing: Execution, quantity: float) -> Trade:
    """
    Build the trade for closing `quantity` of `lot` with `closing`.

    Both commissions are prorated against the original fill sizes, so a fill split
    across several matches is charged exactly once in total.
    """
    opening = lot.execution
    closes_long = closing.side is Side.SELL

    if closing.broker_pnl:
        pnl = closing.broker_pnl * quantity / closing.quantity
        source = PnlSource.BROKER
    else:
        price_move = closing.price - opening.price if closes_long else opening.price - closing.price
        pnl = price_move * quantity * closing.multiplier
        source = PnlSource.COMPUTED

    fee = (
        opening.commission * quantity / opening.quantity
        + closing.commission * quantity / closing.quantity
    )
    strategy = Strategy.LONG_CONTINUATION if closes_long else Strategy.SHORT_CONTINUATION
    return Trade(
        instrument=closing.symbol,
        quantity=quantity,
        pnl=pnl,
        fee=fee,
        start_time=opening.timestamp,
        end_time=closing.timestamp,
        strategy=strategy.value,
        pnl_source=source,
    )


def match_executions(
    executions: Iterable[Execution],
    *,
    config: ReconConfig | None = None,
) -> MatchResult:
    """
    Match executions FIFO into round trips grouped by closing date.

    Executions are sorted by timestamp (stable, so equal timestamps keep input order).
    All queues live in the returned result; nothing is shared between calls.

    Args:
        executions: Fills in any order.
        config: Lot epsilon and fee policy (defaults to the global config).

    Returns:
        MatchResult whose days are finalized (net of fees) and ordered by date.

    Raises:
        ValueError: If an execution has a non-positive quantity.
    """
    config = config or get_config()
    epsilon = config.lot_epsilon
    result = MatchResult()

    for execution in sorted(executions, key=lambda e: e.timestamp):
        if execution.quantity <= 0:
            raise ValueError("Execution quantity must be positive")

        if execution.side is Side.BUY:
            closing_queues, opening_queues = result.open_shorts, result.open_longs
        else:
            closing_queues, opening_queues = result.open_longs, result.open_shorts

        remaining = execution.quantity
        lots = closing_queues.get(execution.symbol)
        while remaining > epsilon and lots:
            lot = lots[0]
            matched = min(remaining, lot.quantity)
            trade = close_lot(lot, execution, matched)

            day = result.days.get(execution.trade_date)
            if day is None:
                day = DayEntry(date=execution.trade_date)
                result.days[execution.trade_date] = day
            day.add_trade(trade)

            lot.quantity -= matched
            remaining -= matched
            if lot.quantity <= epsilon:
                lots.popleft()

        if lots is not None and not lots:
            del closing_queues[execution.symbol]

        if remaining > epsilon:
            opening_queues.setdefault(execution.symbol, deque()).append(
                OpenLot(execution=execution, quantity=remaining)
            )

    for day in result.days.values():
        day.finalize(broker_pnl_includes_fees=config.broker_pnl_includes_fees)
    result.days = dict(sorted(result.days.items()))

    logger.info(
        "Matched executions",
        days=len(result.days),
        trades=sum(len(day.trades) for day in result.days.values()),
        open_symbols=len(result.open_longs) + len(result.open_shorts),
    )
    return result
