"""Header keyword resolution.

Broker exports name the same column differently per language and report variant
("Menge"/"Quantity"/"Qty"). Each logical field is declared with a list of keyword
synonyms; the first header column containing any of them wins.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from broker_recon.exceptions import MissingColumnsError
from broker_recon.parsing.numbers import parse_number


class ColumnMap:
    """Logical field name -> column index (None when the header has no such column)."""

    def __init__(self, indexes: Mapping[str, int | None]) -> None:
        self._indexes = dict(indexes)

    def __contains__(self, field: object) -> bool:
        return isinstance(field, str) and self._indexes.get(field) is not None

    def __repr__(self) -> str:
        return f"ColumnMap({self._indexes!r})"

    def index(self, field: str) -> int | None:
        return self._indexes.get(field)

    def value(self, row: Sequence[str], field: str, default: str = "") -> str:
        """Return the field's cell, or `default` if the column is absent or the row is short."""
        idx = self._indexes.get(field)
        if idx is None or idx >= len(row):
            return default
        return row[idx]

    def number(self, row: Sequence[str], field: str) -> float:
        return parse_number(self.value(row, field))

    def missing(self, fields: Sequence[str]) -> list[str]:
        return [field for field in fields if field not in self]

    def require(self, fields: Sequence[str]) -> None:
        """
        Raises:
            MissingColumnsError: If any of `fields` was not resolved.
        """
        missing = self.missing(fields)
        if missing:
            raise MissingColumnsError(missing)


def resolve_columns(
    header: Sequence[str],
    fields: Mapping[str, Sequence[str]],
    *,
    excluded: Mapping[str, Sequence[str]] | None = None,
) -> ColumnMap:
    """
    Resolve logical fields to column indexes by keyword.

    Args:
        header: Header row tokens (matched case-insensitively).
        fields: Logical field -> acceptable substring keywords.
        excluded: Logical field -> keywords that disqualify a column for that field.

    Returns:
        ColumnMap; fields with no matching column map to None.
    """
    excluded = excluded or {}
    normalized = [token.strip().casefold() for token in header]
    indexes: dict[str, int | None] = {}
    for name, keywords in fields.items():
        deny = excluded.get(name, ())
        indexes[name] = next(
            (
                idx
                for idx, token in enumerate(normalized)
                if any(keyword in token for keyword in keywords)
                and not any(word in token for word in deny)
            ),
            None,
        )
    return ColumnMap(indexes)
