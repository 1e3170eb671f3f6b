"""
Column mapping — the pair of functions translating a visual column index to a
field identifier and back.

A DataSource never assumes a mapping policy of its own. Until a mapping is
installed both directions answer None. The builders here are conveniences for
the common policies:

  - unmapped():        the no-op pair a source starts with
  - identity():        column i <-> field i (positional rows addressed by index)
  - from_fields(...):  column i <-> fields[i] (keyed rows, declared columns)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from core.schema import FieldIdentifier


def _no_field(column: int) -> FieldIdentifier:
    return None


def _no_column(field: Any) -> Optional[int]:
    return None


@dataclass(frozen=True)
class ColumnMapping:
    column_to_field: Callable[[int], FieldIdentifier] = _no_field
    field_to_column: Callable[[Any], Optional[int]] = _no_column

    @classmethod
    def unmapped(cls) -> "ColumnMapping":
        return cls()

    @classmethod
    def identity(cls) -> "ColumnMapping":
        return cls(column_to_field=lambda column: column, field_to_column=lambda field: field)

    @classmethod
    def from_fields(cls, fields: Sequence[FieldIdentifier]) -> "ColumnMapping":
        """
        Map column i to fields[i]. Field accessor functions are matched back to
        their position by identity, string keys by value.
        """
        fields = tuple(fields)
        positions = {}
        for i, f in enumerate(fields):
            if callable(f):
                continue
            positions.setdefault(f, i)

        def column_to_field(column: int) -> FieldIdentifier:
            if 0 <= column < len(fields):
                return fields[column]
            return None

        def field_to_column(field: Any) -> Optional[int]:
            if callable(field):
                return next((i for i, f in enumerate(fields) if f is field), None)
            try:
                return positions.get(field)
            except TypeError:
                return None

        return cls(column_to_field=column_to_field, field_to_column=field_to_column)
