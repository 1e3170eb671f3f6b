"""
DataSource — a uniform row/column view over a collection of records.

Records are either sequences of cell values ("positional") or mappings from
field identifier to cell value ("keyed"). Callers address cells by physical row
index and visual column index; the source translates a column index to a field
identifier through its column_to_field function and reads the record the way
its representation requires.

Field identifiers resolve in one of three ways:
  1. str       -> nested path lookup ("a.b.c")
  2. callable  -> field accessor function; reader form fn(record), writer form
                  fn(target, value) when the range accessor builds mappings
  3. otherwise -> direct key / index
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, List, Optional

import pandas as pd

from core.config import DataSourceConfig
from core.errors import DisposedDataSourceError
from core.schema import (
    KEYED,
    POSITIONAL,
    FieldIdentifier,
    Record,
    Representation,
    coerce_coords,
)
from core.utils import (
    get_property,
    is_absent,
    is_row_index,
    is_sequence,
    lookup,
    set_property,
)
from data_prep.loader import records_from_frame

from .mapping import ColumnMapping, _no_column, _no_field

logger = logging.getLogger(__name__)

RowOverride = Callable[[int], Any]


def _no_override(row: int) -> Any:
    return row


class DataSource:
    """
    Holds the backing collection and answers cell, row, column and range reads.

    Parameters
    ----------
    data : sequence of records, optional
        Backing collection. May be empty; None is treated as an empty list.
    config : DataSourceConfig, optional
        Fixes the representation tag and lookup settings for the lifetime of the source.
    mapping : ColumnMapping, optional
        Initial column_to_field / field_to_column pair. Defaults to the unmapped pair.
    row_override : callable, optional
        Hook called once per get_at_cell() with the physical row index. Returning a
        row index (or None) means "use the stored record"; any other value is read
        as the record instead.
    """

    def __init__(
        self,
        data: Any = None,
        config: Optional[DataSourceConfig] = None,
        *,
        mapping: Optional[ColumnMapping] = None,
        row_override: Optional[RowOverride] = None,
    ):
        self._config = config or DataSourceConfig()
        self._data = [] if data is None else data
        self._row_override: RowOverride = row_override or _no_override
        self._disposed = False

        self.column_to_field: Callable[[int], FieldIdentifier] = _no_field
        self.field_to_column: Callable[[Any], Optional[int]] = _no_column
        if mapping is not None:
            self.use_mapping(mapping)

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        config: Optional[DataSourceConfig] = None,
        *,
        row_override: Optional[RowOverride] = None,
    ) -> "DataSource":
        """
        Build a source over the rows of a DataFrame.
        Keyed sources are mapped by column label, positional ones by index.
        """
        config = config or DataSourceConfig()
        records = records_from_frame(df, config.representation)
        if config.representation == KEYED:
            mapping = ColumnMapping.from_fields([str(c) for c in df.columns])
        else:
            mapping = ColumnMapping.identity()
        return cls(records, config, mapping=mapping, row_override=row_override)

    # ----- state -----

    @property
    def config(self) -> DataSourceConfig:
        return self._config

    @property
    def representation(self) -> Representation:
        return self._config.representation

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _ensure_alive(self, operation: str) -> None:
        if self._disposed:
            raise DisposedDataSourceError(operation)

    def use_mapping(self, mapping: ColumnMapping) -> None:
        """Install both directions of a column mapping."""
        self._ensure_alive("use_mapping")
        self.column_to_field = mapping.column_to_field
        self.field_to_column = mapping.field_to_column

    def get_data(self, as_grid: bool = False) -> Any:
        """
        Return the backing collection, or with as_grid=True a list-of-lists
        snapshot of the whole dataset regardless of representation.
        """
        self._ensure_alive("get_data")
        if not as_grid:
            return self._data

        n_rows = self.count_rows()
        if n_rows == 0:
            return []
        return self.get_by_range(
            {"row": 0, "col": 0},
            {"row": n_rows - 1, "col": max(self.count_columns() - 1, 0)},
            True,
        )

    def set_data(self, data: Any) -> None:
        """Replace the backing collection. Representation and mapping are kept."""
        self._ensure_alive("set_data")
        self._data = [] if data is None else data
        logger.debug("Data source replaced: %d rows", self.count_rows())

    # ----- resolution -----

    def _read(self, record: Any, field: FieldIdentifier) -> Any:
        if isinstance(field, str):
            return get_property(record, field, self._config.path_separator)
        if callable(field):
            return field(record)
        return lookup(record, field)

    def _stored(self, row: int) -> Any:
        if not is_sequence(self._data):
            return None
        return lookup(self._data, row)

    # ----- accessors -----

    def get_at_column(self, column: int) -> List[Any]:
        """Values of one visual column, one per stored record in collection order."""
        self._ensure_alive("get_at_column")
        if not is_sequence(self._data):
            return []
        field = self.column_to_field(column)
        return [self._read(record, field) for record in self._data]

    def get_at_row(self, row: int) -> Optional[Record]:
        """The stored record at a physical row, unmodified; None when out of range."""
        self._ensure_alive("get_at_row")
        return self._stored(row)

    def get_at_cell(self, row: int, column: int) -> Any:
        """
        Value at a physical row and visual column.

        The row override hook is asked for a replacement record first; None is
        returned when no record is available.
        """
        self._ensure_alive("get_at_cell")
        override = self._row_override(row)
        record = self._stored(row) if is_row_index(override) else override
        if is_absent(record):
            return None

        field = self.column_to_field(column)
        if callable(field):
            # accessor functions always read the stored record
            return field(self._stored(row))
        return self._read(record, field)

    def get_by_range(self, start: Any, end: Any, as_grid: bool = False) -> List[Any]:
        """
        Rectangular read covering both corners inclusively.

        Parameters
        ----------
        start, end : CellCoords, {"row", "col"} mapping or (row, col) tuple
            Opposite corners, in any order.
        as_grid : bool
            Keyed sources only: build each row as a list instead of a dict.

        Field accessor functions act as readers fn(row) when as_grid is set,
        and additionally as writers fn(new_row, value) when building dicts.
        """
        self._ensure_alive("get_by_range")
        start, end = coerce_coords(start), coerce_coords(end)
        start_row, end_row = min(start.row, end.row), max(start.row, end.row)
        start_col, end_col = min(start.col, end.col), max(start.col, end.col)

        result = []
        for current_row in range(start_row, end_row + 1):
            row = self._stored(current_row)

            if self.representation == POSITIONAL:
                new_row = [] if is_absent(row) else list(row[start_col:end_col + 1])

            else:
                new_row = [] if as_grid else {}
                for column in range(start_col, end_col + 1):
                    field = self.column_to_field(column)
                    if callable(field):
                        value = field(row)
                    else:
                        value = None if is_absent(row) else self._read(row, field)

                    if as_grid:
                        new_row.append(value)
                    elif callable(field):
                        field(new_row, value)
                    else:
                        new_row[field] = value

            result.append(new_row)

        return result

    def set_at_cell(self, row: int, column: int, value: Any) -> None:
        """
        Write a value into the stored record using the same field resolution as
        reads. Accessor functions are called writer-style fn(record, value).
        """
        self._ensure_alive("set_at_cell")
        record = self._stored(row)
        if is_absent(record):
            raise IndexError(f"No record at row {row}.")

        field = self.column_to_field(column)
        if isinstance(field, str):
            set_property(record, field, value, self._config.path_separator)
        elif callable(field):
            field(record, value)
        else:
            record[field] = value

    # ----- shape -----

    def count_rows(self) -> int:
        self._ensure_alive("count_rows")
        return len(self._data) if is_sequence(self._data) else 0

    def count_columns(self) -> int:
        """
        Column count taken from a sample record: the first one, or the next when
        the first is absent. Records beyond the sample are not inspected.
        """
        self._ensure_alive("count_columns")
        if not is_sequence(self._data):
            return 0

        sample = None
        for i in range(min(self._config.column_sample_size, len(self._data))):
            sample = self._data[i]
            if not is_absent(sample):
                break

        if is_absent(sample):
            return 0
        if self.representation == POSITIONAL:
            return len(sample) if is_sequence(sample) else 0
        return len(sample) if isinstance(sample, Mapping) else 0

    def destroy(self) -> None:
        """Release the collection and hook. Later calls raise DisposedDataSourceError."""
        if self._disposed:
            return
        self._data = None
        self._row_override = None
        self._disposed = True
        logger.debug("Data source destroyed")
