"""Unit tests for locale-tolerant number parsing."""

from __future__ import annotations

import pytest

from broker_recon.parsing import parse_number


class TestSeparators:
    """US, European and Swiss notations resolve to the same value."""

    @pytest.mark.parametrize("token", ["1'234.56", "1.234,56", "1,234.56", "1 234.56"])
    def test_thousands_and_decimal_variants(self, token: str) -> None:
        """All common notations for one thousand two hundred thirty-four."""
        assert parse_number(token) == pytest.approx(1234.56)

    def test_single_comma_is_decimal(self) -> None:
        """A lone comma is a decimal comma."""
        assert parse_number("12,5") == pytest.approx(12.5)

    def test_first_of_several_commas_is_decimal(self) -> None:
        """Without a dot the first comma is the decimal point and later commas are dropped."""
        assert parse_number("1,234,567") == pytest.approx(1.234567)

    def test_plain_integer(self) -> None:
        assert parse_number("42") == 42.0


class TestEmptyAndNoise:
    """Placeholders and garbage never raise."""

    @pytest.mark.parametrize("token", ["", "-", "--", "   ", "n/a", "(abc)"])
    def test_placeholders_are_zero(self, token: str) -> None:
        """Empty or non-numeric tokens normalize to zero."""
        assert parse_number(token) == 0.0

    def test_none_is_zero(self) -> None:
        assert parse_number(None) == 0.0

    def test_numbers_pass_through(self) -> None:
        """Already-numeric values are returned as floats."""
        assert parse_number(7) == 7.0
        assert parse_number(2.5) == 2.5

    def test_currency_codes_are_stripped(self) -> None:
        """Currency prefixes and suffixes do not affect the value."""
        assert parse_number("USD -1,234.50") == pytest.approx(-1234.5)
        assert parse_number("99.90 CHF") == pytest.approx(99.9)

    def test_negative_european(self) -> None:
        assert parse_number("-1.234,56") == pytest.approx(-1234.56)
