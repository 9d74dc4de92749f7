"""Unit tests for trade file imports: journal backups, realized reports, format detection."""

from __future__ import annotations

import pytest

from broker_recon.diagnostics import Diagnostics, SkipReason
from broker_recon.trades import (
    PnlSource,
    TradeFormat,
    detect_trade_format,
    dump_journal_csv,
    parse_journal_csv,
    parse_realized_csv,
    parse_trades_csv,
)


class TestJournalBackup:
    """Tests for parse_journal_csv() and dump_journal_csv()."""

    def test_parse_sample(self, journal_csv: str) -> None:
        days = parse_journal_csv(journal_csv)

        day = days["2026-02-06"]
        assert day.total == pytest.approx(150.5)
        assert day.fees == pytest.approx(4.0)
        assert day.note == "Good day"
        assert day.finalized
        assert len(day.trades) == 1

        trade = day.trades[0]
        assert trade.instrument == "ES"
        assert trade.pnl == pytest.approx(154.5)
        assert trade.start == "09:30"
        assert trade.end == "09:45"
        assert trade.tag == "A+"
        assert trade.strategy == "Long-Cont."
        assert trade.pnl_source is PnlSource.STATED

    def test_invalid_details_keep_stated_total(self, journal_csv: str) -> None:
        """Unreadable trade details leave an empty list but the day's total survives."""
        diagnostics = Diagnostics()
        days = parse_journal_csv(journal_csv, diagnostics=diagnostics)

        broken = days["2026-02-09"]
        assert broken.trades == []
        assert broken.total == pytest.approx(-20.0)
        assert diagnostics.count(SkipReason.INVALID_JSON) == 1

    def test_trade_objects_are_validated(self) -> None:
        """A trade without its P/L fails validation like malformed JSON does."""
        text = 'Datum,PnL,details_json\n2026-02-06,10,"[{""inst"": ""ES""}]"\n'
        diagnostics = Diagnostics()
        days = parse_journal_csv(text, diagnostics=diagnostics)

        assert days["2026-02-06"].trades == []
        assert diagnostics.count(SkipReason.INVALID_JSON) == 1

    def test_export_round_trips(self, executions_csv: str) -> None:
        """Matched days written as a backup read back with the same content."""
        original = parse_trades_csv(executions_csv)
        original["2026-02-06"].note = "Trend day, held; no adds"

        restored = parse_journal_csv(dump_journal_csv(original))

        assert list(restored) == list(original)
        before, after = original["2026-02-06"], restored["2026-02-06"]
        assert after.total == pytest.approx(before.total)
        assert after.fees == pytest.approx(before.fees)
        assert after.note == before.note
        assert [(t.instrument, t.quantity, t.start, t.end, t.strategy) for t in after.trades] == [
            (t.instrument, t.quantity, t.start, t.end, t.strategy) for t in before.trades
        ]
        assert [t.pnl for t in after.trades] == [pytest.approx(t.pnl) for t in before.trades]


class TestRealizedReport:
    """Tests for parse_realized_csv()."""

    def test_parse_sample(self, realized_csv: str) -> None:
        days = parse_realized_csv(realized_csv)

        assert list(days) == ["2026-02-06", "2026-02-07"]
        first = days["2026-02-06"]
        assert [t.instrument for t in first.trades] == ["AAPL", "MSFT"]
        assert first.fees == pytest.approx(2.5)
        assert first.total == pytest.approx(120 - 2.5)
        assert first.trades[0].quantity == 10
        assert first.trades[0].strategy == "Day-Trade"
        assert first.trades[0].start == "00:00"

        assert days["2026-02-07"].total == pytest.approx(-45)

    def test_without_realized_column(self) -> None:
        text = "Symbol,Date/Time,Quantity,Proceeds\nAAPL,2026-02-06,10,1800\n"
        assert parse_realized_csv(text) == {}

    def test_without_header_row(self) -> None:
        assert parse_realized_csv("a,b,c\n1,2,3\n") == {}

    def test_zero_rows_are_skipped(self) -> None:
        text = (
            "Symbol,Date/Time,Comm/Fee,Realized P/L\n"
            "AAPL,2026-02-06 10:00:00,0,0\n"
            "AAPL,2026-02-06 11:00:00,0,5\n"
        )
        days = parse_realized_csv(text)
        assert len(days["2026-02-06"].trades) == 1


class TestFormatDetection:
    """Tests for detect_trade_format() and parse_trades_csv()."""

    def test_detects_each_format(
        self, executions_csv: str, journal_csv: str, realized_csv: str
    ) -> None:
        assert detect_trade_format(executions_csv) is TradeFormat.EXECUTIONS
        assert detect_trade_format(journal_csv) is TradeFormat.JOURNAL
        assert detect_trade_format(realized_csv) is TradeFormat.REALIZED

    def test_semicolon_execution_export(self) -> None:
        text = "Symbol;Side;Qty;Price;Time\nAAPL;Buy;1;100;2026-02-06 09:30:00\n"
        assert detect_trade_format(text) is TradeFormat.EXECUTIONS

    def test_executions_are_matched(self, executions_csv: str) -> None:
        """Buy 2 @ 100, sell 2 @ 110 on ES: 1000 gross, 8 commission."""
        days = parse_trades_csv(executions_csv)

        day = days["2026-02-06"]
        assert len(day.trades) == 1
        assert day.trades[0].instrument == "ES Mar20 '26"
        assert day.trades[0].pnl == pytest.approx(1000)
        assert day.fees == pytest.approx(8)
        assert day.total == pytest.approx(992)

    def test_journal_and_realized_dispatch(self, journal_csv: str, realized_csv: str) -> None:
        assert set(parse_trades_csv(journal_csv)) == {"2026-02-06", "2026-02-09"}
        assert set(parse_trades_csv(realized_csv)) == {"2026-02-06", "2026-02-07"}

    @pytest.mark.parametrize("text", ["", "Symbol,Side,Qty,Fill Price,Time", "\n\n"])
    def test_fewer_than_two_lines(self, text: str) -> None:
        assert parse_trades_csv(text) == {}

    def test_missing_columns_surface_in_diagnostics(self) -> None:
        """An execution export missing its symbol column imports nothing."""
        text = "Side,Qty,Fill Price,Time\nBuy,1,100,2026-02-06 09:30:00\n"
        diagnostics = Diagnostics()

        assert parse_trades_csv(text, diagnostics=diagnostics) == {}
        assert diagnostics.count(SkipReason.MISSING_COLUMNS) == 1
