"""Portfolio snapshot models produced by the statement parser."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class PortfolioPosition:
    """One held or closed instrument.

    Open-position rows fill quantity/cost/value/unrealized; realized-performance rows
    fill realized_pnl. A symbol seen only in the realized section keeps quantity 0,
    which marks it as fully closed during the period.
    """

    symbol: str
    currency: str = "USD"
    quantity: float = 0.0
    cost_basis: float = 0.0
    close_price: float = 0.0
    market_value: float = 0.0
    unrealized_pnl: float = 0.0
    realized_pnl: float = 0.0

    @property
    def is_closed(self) -> bool:
        return self.quantity == 0


@dataclass
class PortfolioSummary:
    """Aggregates in the reporting currency."""

    total_value: float = 0.0
    unrealized: float = 0.0
    realized: float = 0.0
    dividends: float = 0.0
    withholding_tax: float = 0.0


@dataclass
class PortfolioSnapshot:
    """Positions, cash and rates for one reporting period."""

    positions: dict[str, PortfolioPosition] = field(default_factory=dict)
    cash: dict[str, float] = field(default_factory=dict)
    """Currency code -> ending cash balance."""

    exchange_rates: dict[str, float] = field(default_factory=dict)
    """"{ccy}_{base}" -> rate. A 0.0 value is a placeholder for a rate still needed."""

    dividends: float = 0.0
    withholding_tax: float = 0.0
    period: str = ""
    summary: PortfolioSummary = field(default_factory=PortfolioSummary)

    def to_base(self, amount: float, currency: str, base_currency: str = "USD") -> float:
        """Convert an amount into the reporting currency (0.0 when no rate is known)."""
        if currency == base_currency:
            return amount
        return amount * self.exchange_rates.get(f"{currency}_{base_currency}", 0.0)

    def missing_rates(self) -> list[str]:
        """Rate keys that are still placeholders."""
        return sorted(pair for pair, rate in self.exchange_rates.items() if rate == 0)

    def recompute_summary(self, base_currency: str = "USD") -> PortfolioSummary:
        """
        Rebuild `summary` from positions, rates and the dividend/tax accumulators.

        Market value and unrealized P/L are converted into the reporting currency.
        Realized P/L is summed as reported, since brokers already state it in the base
        currency.
        """
        positions = self.positions.values()
        self.summary = PortfolioSummary(
            total_value=sum(
                self.to_base(pos.market_value, pos.currency, base_currency) for pos in positions
            ),
            unrealized=sum(
                self.to_base(pos.unrealized_pnl, pos.currency, base_currency)
                for pos in positions
            ),
            realized=sum(pos.realized_pnl for pos in positions),
            dividends=self.dividends,
            withholding_tax=self.withholding_tax,
        )
        return self.summary

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
