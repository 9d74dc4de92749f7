"""Timestamp parsing for broker exports."""

from __future__ import annotations

from datetime import datetime

# Tried after ISO-8601, in order.
_FALLBACK_FORMATS = (
    "%Y%m%d %H%M%S",
    "%Y%m%d",
    "%d.%m.%Y %H:%M:%S",
    "%d.%m.%Y %H:%M",
    "%d.%m.%Y",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
)


def parse_timestamp(value: str) -> datetime | None:
    """
    Parse an export timestamp, returning None when no supported layout fits.

    Accepts ISO-8601 ("2026-02-06 18:32:08", "2026-02-06T18:32:08"), the comma form used
    by activity statements ("2026-02-06, 18:32:08") and common day-first/month-first
    layouts. Offsets are dropped: timestamps stay in the exporting account's local time.
    """
    text = " ".join(value.replace(",", " ").split())
    if not text:
        return None

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        parsed = None
        for fmt in _FALLBACK_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    return parsed.replace(tzinfo=None)
