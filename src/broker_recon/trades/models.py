"""Trade journal models: executions, matched round trips and per-day entries."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import datetime


class Side(str, Enum):
    """Execution side."""

    BUY = "Buy"
    SELL = "Sell"

    @property
    def opposite(self) -> Side:
        return Side.SELL if self is Side.BUY else Side.BUY


class PnlSource(str, Enum):
    """Where a trade's realized P/L figure came from."""

    BROKER = "broker"
    COMPUTED = "computed"
    STATED = "stated"
    """Taken as-is from a journal or realized-P/L export."""


class Strategy(str, Enum):
    """Direction tag for a matched round trip."""

    LONG_CONTINUATION = "Long-Cont."
    SHORT_CONTINUATION = "Short-Cont."
    DAY_TRADE = "Day-Trade"


@dataclass(frozen=True)
class Execution:
    """One brokerage fill.

    Quantity is always positive; direction lives in `side`. `broker_pnl` is non-zero only
    when the export carries a realized P/L column for the row.
    """

    symbol: str
    contract_description: str
    side: Side
    quantity: float
    price: float
    timestamp: datetime
    commission: float = 0.0
    multiplier: float = 1.0
    broker_pnl: float = 0.0

    @property
    def trade_date(self) -> str:
        return self.timestamp.date().isoformat()


@dataclass
class OpenLot:
    """Unmatched remainder of an opening execution."""

    execution: Execution
    quantity: float


@dataclass(frozen=True)
class Trade:
    """One matched round trip (or the matched portion of one)."""

    instrument: str
    quantity: float
    pnl: float
    fee: float
    start_time: datetime | None = None
    end_time: datetime | None = None
    strategy: str = Strategy.DAY_TRADE.value
    tag: str = ""
    pnl_source: PnlSource = PnlSource.COMPUTED

    @property
    def start(self) -> str:
        return self.start_time.strftime("%H:%M") if self.start_time else "00:00"

    @property
    def end(self) -> str:
        return self.end_time.strftime("%H:%M") if self.end_time else "00:00"

    def to_dict(self) -> dict[str, Any]:
        """Plain dict with ISO-8601 datetimes plus the HH:MM `start`/`end` journal view."""
        data = asdict(self)
        data["start_time"] = self.start_time.isoformat() if self.start_time else None
        data["end_time"] = self.end_time.isoformat() if self.end_time else None
        data["pnl_source"] = self.pnl_source.value
        data["start"] = self.start
        data["end"] = self.end
        return data


@dataclass
class DayEntry:
    """All trades closed on one calendar date.

    While trades are being added, `total` holds gross P/L. `finalize()` subtracts the
    day's fees exactly once, after which `total` is the net figure.
    """

    date: str
    trades: list[Trade] = field(default_factory=list)
    total: float = 0.0
    fees: float = 0.0
    note: str = ""
    finalized: bool = False

    @property
    def gross_pnl(self) -> float:
        return sum(trade.pnl for trade in self.trades)

    def add_trade(self, trade: Trade) -> None:
        if self.finalized:
            raise ValueError(f"Cannot add trades to finalized day {self.date}")
        self.trades.append(trade)
        self.total += trade.pnl
        self.fees += trade.fee

    def finalize(self, *, broker_pnl_includes_fees: bool = False) -> None:
        """
        Convert the running gross total to net by subtracting fees once.

        Args:
            broker_pnl_includes_fees: Skip the fee of trades whose P/L was reported by the
                broker, for exports where that figure is already net of commission.
        """
        if self.finalized:
            return
        deductible = sum(
            trade.fee
            for trade in self.trades
            if not (broker_pnl_includes_fees and trade.pnl_source is PnlSource.BROKER)
        )
        self.total -= deductible
        self.finalized = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "total": self.total,
            "fees": self.fees,
            "note": self.note,
            "trades": [trade.to_dict() for trade in self.trades],
        }
