"""Unit tests for export timestamp parsing."""

from __future__ import annotations

from datetime import datetime

import pytest

from broker_recon.parsing import parse_timestamp

EXPECTED = datetime(2026, 2, 6, 18, 32, 8)


@pytest.mark.parametrize(
    "value",
    [
        "2026-02-06 18:32:08",
        "2026-02-06T18:32:08",
        "2026-02-06, 18:32:08",
        "06.02.2026 18:32:08",
        "02/06/2026 18:32:08",
    ],
)
def test_supported_layouts(value: str) -> None:
    assert parse_timestamp(value) == EXPECTED


def test_offset_is_dropped() -> None:
    """Timestamps stay in the account's local clock time."""
    parsed = parse_timestamp("2026-02-06T18:32:08+01:00")
    assert parsed == EXPECTED
    assert parsed is not None and parsed.tzinfo is None


def test_date_only() -> None:
    assert parse_timestamp("2026-02-06") == datetime(2026, 2, 6)


@pytest.mark.parametrize("value", ["", "   ", "yesterday", "2026-13-45"])
def test_unparseable_returns_none(value: str) -> None:
    assert parse_timestamp(value) is None
