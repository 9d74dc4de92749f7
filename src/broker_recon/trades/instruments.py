"""Contract description -> canonical symbol and point value.

Rules are evaluated in order and the first match wins, so every micro contract sits
above its standard counterpart ("Micro E-mini S&P" also contains "E-mini S&P").
Supporting a new contract means adding a row to `DEFAULT_INSTRUMENT_RULES`.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class InstrumentRule:
    """Pattern over the upper-cased contract text, with the symbol and multiplier it implies."""

    pattern: re.Pattern[str]
    symbol: str
    multiplier: float

    def matches(self, text: str) -> bool:
        return self.pattern.search(text.upper()) is not None


def _rule(pattern: str, symbol: str, multiplier: float) -> InstrumentRule:
    return InstrumentRule(re.compile(pattern), symbol, multiplier)


DEFAULT_INSTRUMENT_RULES: tuple[InstrumentRule, ...] = (
    # Micro contracts
    _rule(r"\bMES\b|MICRO E-?MINI S&P", "MES", 5),
    _rule(r"\bMNQ\b|MICRO E-?MINI NASDAQ", "MNQ", 2),
    _rule(r"\bMYM\b|MICRO E-?MINI DOW", "MYM", 0.5),
    _rule(r"\bM2K\b|MICRO E-?MINI RUSSELL", "M2K", 5),
    _rule(r"\bMGC\b|MICRO GOLD", "MGC", 10),
    _rule(r"\bMCL\b|MICRO (WTI )?CRUDE", "MCL", 100),
    # Standard contracts
    _rule(r"\bES\b|E-?MINI S&P", "ES", 50),
    _rule(r"\bNQ\b|E-?MINI NASDAQ", "NQ", 20),
    _rule(r"\bYM\b|E-?MINI DOW", "YM", 5),
    _rule(r"\bRTY\b|E-?MINI RUSSELL", "RTY", 50),
    _rule(r"\bGC\b|\bGOLD FUTURES?\b", "GC", 100),
    _rule(r"\bCL\b|\bCRUDE OIL\b", "CL", 1000),
)


def infer_instrument(
    text: str, rules: Sequence[InstrumentRule] = DEFAULT_INSTRUMENT_RULES
) -> InstrumentRule | None:
    """Return the first rule matching `text`, or None for plain (multiplier 1) instruments."""
    return next((rule for rule in rules if rule.matches(text)), None)
