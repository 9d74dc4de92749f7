"""
Shared test fixtures.

PHILOSOPHY: Use REAL export text wherever possible. The engine only sees strings, so
fixtures are small but realistic statement and trade exports rather than mocks.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from broker_recon.config import ReconConfig, get_config, set_config
from broker_recon.trades.models import Execution, Side

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

SESSION_START = datetime(2026, 2, 6, 9, 30)


# ============================================================================
# Activity statement (multi-section)
# ============================================================================
STATEMENT_CSV = """\
Statement,Header,Field Name,Field Value
Statement,Data,Period,"January 1, 2026 - March 31, 2026"
Open Positions,Header,DataDiscriminator,Asset Category,Currency,Symbol,Quantity,Cost Basis,Close Price,Value,Unrealized P/L
Open Positions,Data,Summary,Stocks,USD,AAPL,10,1500,180,1800,300
Open Positions,Data,Summary,Stocks,EUR,SAP,5,"1.000,00",210,1050,50
Open Positions,Data,Summary,Futures,USD,ESH6,1,0,5000,0,0
Open Positions,Total,,,,,,,,,
Realized & Unrealized Performance Summary,Header,Asset Category,Symbol,Description,Realized S/T Profit,Realized L/T Profit,Realized Total,Unrealized Total
Realized & Unrealized Performance Summary,Data,Stocks,AAPL,APPLE INC,100,20,120,300
Realized & Unrealized Performance Summary,Data,Stocks,MSFT,MICROSOFT CORP,-50,0,-50,0
Realized & Unrealized Performance Summary,Data,,ES,E-mini S&P 500 Future,500,0,500,0
Cash Report,Header,Currency Summary,Currency,Total,Securities,Futures
Cash Report,Data,Starting Cash,Base Currency Summary,9000,9000,0
Cash Report,Data,Ending Cash,USD,10000,10000,0
Cash Report,Data,Ending Cash,EUR,500,500,0
Cash Report,Data,Ending Settled Cash,USD,9999,9999,0
Base Currency Exchange Rate,Header,Currency,Rate
Base Currency Exchange Rate,Data,EUR,1.08
Dividends,Header,Currency,Date,Description,Amount
Dividends,Data,USD,2026-02-10,AAPL(US0378331005) Cash Dividend USD 0.25 per Share (Ordinary Dividend),2.5
Dividends,Data,Total,,,2.5
Withholding Tax,Header,Currency,Date,Description,Amount,Code
Withholding Tax,Data,USD,2026-02-10,AAPL(US0378331005) Cash Dividend USD 0.25 per Share - US Tax,-0.38,
"""


# ============================================================================
# Trade exports
# ============================================================================
EXECUTIONS_CSV = """\
Symbol,Side,Qty,Fill Price,Time,Net Amount,Commission
ES Mar20 '26,Buy,2,100,2026-02-06 09:30:00,10000,4.0
ES Mar20 '26,Sell,2,110,2026-02-06 10:15:00,11000,4.0
"""

REALIZED_CSV = """\
Trades report
Symbol,Date/Time,Quantity,T. Price,Comm/Fee,Realized P/L
AAPL,"2026-02-06, 10:30:00",-10,180,-1.5,120
MSFT,"2026-02-06, 11:00:00",5,300,-1,0
TSLA,"2026-02-07, 15:00:00",-3,200,0,-45
"""

JOURNAL_CSV = """\
Datum,PnL,Fees,Notiz,details_json
2026-02-06,150.5,4,"Good day","[{""inst"": ""ES"", ""qty"": 1, ""pnl"": 154.5, ""fee"": 4, ""start"": ""09:30"", ""end"": ""09:45"", ""tag"": ""A+"", ""strategy"": ""Long-Cont.""}]"
2026-02-09,-20,0,"Broken details","not json"
"""


# ============================================================================
# Payslips
# ============================================================================
SALARY_CSV = """\
Jahr;Monat;Monatslohn;Familienzulage;Pauschalspesen;Brutto;AHV;ALV;Sozialfond;BVG;Quellensteuer;Netto;Auszahlung;Kommentar
2025;1;6000;200;300;6500;-344.50;-71.50;-10;-250;-400;5424;5424;Januar
2025;Februar;6000;200;300;6500;-344.50;-71.50;-10;-250;-400;5424;5424;
2025;;6000;200;300;6500;-344.50;-71.50;-10;-250;-400;5424;5424;no month
"""


@pytest.fixture
def statement_csv() -> str:
    return STATEMENT_CSV


@pytest.fixture
def executions_csv() -> str:
    return EXECUTIONS_CSV


@pytest.fixture
def realized_csv() -> str:
    return REALIZED_CSV


@pytest.fixture
def journal_csv() -> str:
    return JOURNAL_CSV


@pytest.fixture
def salary_csv() -> str:
    return SALARY_CSV


@pytest.fixture
def make_execution() -> Callable[..., Execution]:
    """Factory for executions placed `minute` minutes after the session start."""

    def _make(
        side: Side,
        quantity: float,
        price: float,
        minute: int,
        *,
        symbol: str = "ES",
        commission: float = 0.0,
        multiplier: float = 1.0,
        broker_pnl: float = 0.0,
    ) -> Execution:
        return Execution(
            symbol=symbol,
            contract_description=symbol,
            side=side,
            quantity=quantity,
            price=price,
            timestamp=SESSION_START + timedelta(minutes=minute),
            commission=commission,
            multiplier=multiplier,
            broker_pnl=broker_pnl,
        )

    return _make


@pytest.fixture(autouse=True)
def _restore_global_config() -> Iterator[None]:
    """Tests that swap the global config must not leak it into other tests."""
    original = get_config()
    yield
    set_config(original)


@pytest.fixture
def usd_config() -> ReconConfig:
    return ReconConfig(base_currency="USD")
