"""Shared parsing primitives: number normalization, row tokenizing, column resolution."""

from broker_recon.parsing.columns import ColumnMap, resolve_columns
from broker_recon.parsing.dates import parse_timestamp
from broker_recon.parsing.numbers import parse_number
from broker_recon.parsing.tokenizer import parse_numbered_rows, parse_row, parse_rows

__all__ = [
    "ColumnMap",
    "parse_number",
    "parse_numbered_rows",
    "parse_row",
    "parse_rows",
    "parse_timestamp",
    "resolve_columns",
]
