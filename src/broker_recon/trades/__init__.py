"""Trade journal: execution parsing, FIFO round-trip matching and trade file imports."""

from broker_recon.trades._fifo import MatchResult, close_lot, match_executions
from broker_recon.trades.executions import parse_executions, parse_side, resolve_instrument
from broker_recon.trades.formats import TradeFormat, detect_trade_format, parse_trades_csv
from broker_recon.trades.instruments import (
    DEFAULT_INSTRUMENT_RULES,
    InstrumentRule,
    infer_instrument,
)
from broker_recon.trades.journal import JournalTrade, dump_journal_csv, parse_journal_csv
from broker_recon.trades.models import (
    DayEntry,
    Execution,
    OpenLot,
    PnlSource,
    Side,
    Strategy,
    Trade,
)
from broker_recon.trades.realized import parse_realized_csv

__all__ = [
    "DEFAULT_INSTRUMENT_RULES",
    "DayEntry",
    "Execution",
    "InstrumentRule",
    "JournalTrade",
    "MatchResult",
    "OpenLot",
    "PnlSource",
    "Side",
    "Strategy",
    "Trade",
    "TradeFormat",
    "close_lot",
    "detect_trade_format",
    "dump_journal_csv",
    "infer_instrument",
    "match_executions",
    "parse_executions",
    "parse_journal_csv",
    "parse_realized_csv",
    "parse_side",
    "parse_trades_csv",
    "resolve_instrument",
]
