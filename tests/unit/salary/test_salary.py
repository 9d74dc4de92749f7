"""Unit tests for payslip import."""

from __future__ import annotations

import pytest

from broker_recon.diagnostics import Diagnostics, SkipReason
from broker_recon.salary import parse_month, parse_salary_csv


class TestParseMonth:
    """Tests for parse_month()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("1", 1), ("03", 3), ("12", 12), ("März", 3), ("march", 3), ("Dez.", 12), ("Mai", 5)],
    )
    def test_known(self, value: str, expected: int) -> None:
        assert parse_month(value) == expected

    @pytest.mark.parametrize("value", ["", "0", "13", "Smarch"])
    def test_unknown(self, value: str) -> None:
        assert parse_month(value) is None


class TestParseSalaryCsv:
    """Tests for parse_salary_csv()."""

    def test_sample(self, salary_csv: str) -> None:
        diagnostics = Diagnostics()
        years = parse_salary_csv(salary_csv, diagnostics=diagnostics)

        assert list(years) == ["2025"]
        assert sorted(years["2025"]) == ["01", "02"]

        january = years["2025"]["01"]
        assert january.base_salary == 6000
        assert january.family_allowance == 200
        assert january.flat_expenses == 300
        assert january.gross == 6500
        assert january.ahv == pytest.approx(344.5)
        assert january.withholding_tax == 400
        assert january.net == 5424
        assert january.payout == 5424
        assert january.comment == "Januar"
        assert diagnostics.count(SkipReason.MISSING_VALUE) == 1

    def test_deductions_are_derived(self, salary_csv: str) -> None:
        """Without a deductions column they are the sum of the individual deductions."""
        january = parse_salary_csv(salary_csv)["2025"]["01"]
        assert january.deductions == pytest.approx(344.5 + 71.5 + 10 + 250 + 400)
        assert january.deductions == pytest.approx(january.gross - january.net)

    def test_gross_net_and_payout_are_derived(self) -> None:
        text = (
            "Year,Month,Base Salary,FAZU,AHV,BVG,Correction,Comment\n"
            "2024,December,5000,250,265,300,-15,bonus pending\n"
        )
        entry = parse_salary_csv(text)["2024"]["12"]

        assert entry.gross == 5250
        assert entry.deductions == 565
        assert entry.net == 4685
        assert entry.payout == 4670
        assert entry.comment == "bonus pending"

    def test_stated_deductions_win(self) -> None:
        text = "Jahr,Monat,Brutto,AHV,Abzüge,Netto\n2025,4,6000,300,-1000,5000\n"
        entry = parse_salary_csv(text)["2025"]["04"]

        assert entry.deductions == 1000
        assert entry.net == 5000

    def test_later_row_replaces_month(self) -> None:
        text = "Jahr,Monat,Netto\n2025,5,100\n2025,Mai,200\n"
        assert parse_salary_csv(text)["2025"]["05"].net == 200

    def test_missing_year_column(self) -> None:
        diagnostics = Diagnostics()
        assert parse_salary_csv("Monat,Netto\n1,100\n", diagnostics=diagnostics) == {}
        assert diagnostics.count(SkipReason.MISSING_COLUMNS) == 1

    def test_header_only(self) -> None:
        assert parse_salary_csv("Jahr,Monat,Netto\n") == {}
