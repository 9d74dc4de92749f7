"""Row tokenizer for comma/semicolon delimited broker exports."""

from __future__ import annotations

DELIMITERS = frozenset({",", ";"})
QUOTE = '"'


def parse_row(line: str, *, doubled_quote_escape: bool = False) -> list[str]:
    """
    Split one line into trimmed fields.

    Commas and semicolons both separate fields unless they sit inside a double-quoted
    span. Every `"` toggles the quoted state and is dropped from the output; there is no
    backslash escaping.

    Args:
        line: One raw text line (without its line terminator).
        doubled_quote_escape: Read `""` inside a quoted span as a literal quote. Only the
            journal backup format writes escaped quotes; broker exports never do.

    Returns:
        Field values in order, each stripped of surrounding whitespace.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quote = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == QUOTE:
            if doubled_quote_escape and in_quote and line[i + 1 : i + 2] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quote = not in_quote
        elif char in DELIMITERS and not in_quote:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    fields.append("".join(current).strip())
    return fields


def parse_numbered_rows(
    text: str, *, doubled_quote_escape: bool = False
) -> list[tuple[int, list[str]]]:
    """
    Tokenize a whole export into `(line_number, row)` pairs, dropping blank lines.

    Line numbers are 1-based physical lines of the input, so skipped blank lines still
    count. Line endings are normalized and a leading byte-order mark is removed.
    """
    text = text.removeprefix("\ufeff").replace("\r\n", "\n").replace("\r", "\n")
    rows: list[tuple[int, list[str]]] = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        if not line.strip():
            continue
        row = parse_row(line, doubled_quote_escape=doubled_quote_escape)
        if len(row) == 1 and not row[0]:
            continue
        rows.append((line_number, row))
    return rows


def parse_rows(text: str, *, doubled_quote_escape: bool = False) -> list[list[str]]:
    """Tokenize a whole export into rows, dropping blank lines."""
    numbered = parse_numbered_rows(text, doubled_quote_escape=doubled_quote_escape)
    return [row for _, row in numbered]
