"""Locale-tolerant number parsing for broker exports."""

from __future__ import annotations

import re

_NON_NUMERIC = re.compile(r"[^\d.\-]")
_NUMERIC_PREFIX = re.compile(r"\d*\.?\d*")
_EMPTY_TOKENS = frozenset({"", "-", "--"})


def parse_number(value: object) -> float:
    """
    Convert a textual number in US or European notation into a float.

    Never raises: empty, placeholder (`-`, `--`) and unparseable tokens yield 0.0.

    Separator rules:
    - Apostrophes and whitespace are thousands separators and are dropped.
    - A comma without a dot is the decimal separator ("12,5"). With several such commas
      the first one is the decimal point and the rest are dropped ("1,234,567" gives
      1.234567).
    - With both present, whichever appears last is the decimal separator and the other
      is removed ("1.234,56" and "1,234.56" both give 1234.56).

    Any remaining character other than digits, dots and a leading minus sign (currency
    codes, symbols, brackets) is stripped before conversion; only the leading numeric
    portion of what is left is used.

    Args:
        value: Raw token; non-string values are converted with `str()`.

    Returns:
        Parsed value, or 0.0 if no number can be read.
    """
    if value is None:
        return 0.0
    if isinstance(value, int | float):
        return float(value)

    text = "".join(str(value).replace("'", "").split())
    if text in _EMPTY_TOKENS:
        return 0.0

    if "," in text and "." not in text:
        text = text.replace(",", ".", 1).replace(",", "")
    elif "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".", 1)
        else:
            text = text.replace(",", "")

    text = _NON_NUMERIC.sub("", text)
    negative = text.startswith("-")
    text = text.replace("-", "")

    match = _NUMERIC_PREFIX.match(text)
    digits = match.group(0) if match else ""
    if not any(ch.isdigit() for ch in digits):
        return 0.0

    number = float(digits)
    return -number if negative else number
