from decimal import Decimal

import numpy as np
import pytest

from core.config import DataSourceConfig
from datasource import ColumnMapping, DataSource


def _make_source(data=None, **kwargs):
    if data is None:
        data = [[1, 2, 3], [4, 5, 6]]
    return DataSource(data, DataSourceConfig(), mapping=ColumnMapping.identity(), **kwargs)


def _flatten(rows):
    return [value for row in rows for value in row]


def test_get_at_cell_reads_by_position():
    src = _make_source()

    assert src.get_at_cell(1, 2) == 6
    assert src.get_at_cell(0, 0) == 1


def test_get_at_cell_out_of_range_is_none():
    src = _make_source()

    assert src.get_at_cell(9, 0) is None
    assert src.get_at_cell(0, 7) is None


def test_unmapped_source_reads_nothing():
    src = DataSource([[1, 2]])

    assert src.get_at_cell(0, 0) is None
    assert src.get_at_column(0) == [None]


def test_get_at_row_returns_stored_record():
    data = [[1, 2, 3], [4, 5, 6]]
    src = _make_source(data)

    assert src.get_at_row(0) is data[0]
    assert src.get_at_row(1) is data[1]
    assert src.get_at_row(2) is None
    assert src.get_at_row(-1) is None


def test_get_at_column():
    src = _make_source()

    assert src.get_at_column(1) == [2, 5]
    assert src.get_at_column(5) == [None, None]


def test_string_field_is_a_nested_path():
    src = DataSource([[[1, 2], 3]])
    src.column_to_field = lambda column: "0.1"

    assert src.get_at_cell(0, 0) == 2


def test_range_corner_order_is_irrelevant():
    src = _make_source([[1, 2], [3, 4]])

    forward = src.get_by_range({"row": 0, "col": 0}, {"row": 1, "col": 1})
    backward = src.get_by_range({"row": 1, "col": 0}, {"row": 0, "col": 1})

    assert forward == backward == [[1, 2], [3, 4]]


def test_range_slices_inclusive_columns():
    src = _make_source([[1, 2, 3], [4, 5, 6], [7, 8, 9]])

    assert src.get_by_range((0, 1), (1, 2)) == [[2, 3], [5, 6]]
    assert src.get_by_range((2, 0), (2, 0)) == [[7]]


def test_range_past_the_end_yields_empty_rows():
    src = _make_source([[1, 2], [3, 4]])

    assert src.get_by_range((0, 0), (3, 1)) == [[1, 2], [3, 4], [], []]


def test_full_range_matches_grid_snapshot():
    src = _make_source()

    top_left = {"row": 0, "col": 0}
    bottom_right = {"row": src.count_rows() - 1, "col": src.count_columns() - 1}

    assert _flatten(src.get_by_range(top_left, bottom_right, True)) == _flatten(src.get_data(True))
    assert src.get_data(True) == [[1, 2, 3], [4, 5, 6]]


def test_get_data_returns_backing_collection():
    data = [[1, 2, 3]]
    src = _make_source(data)

    assert src.get_data() is data


def test_counts():
    src = _make_source()

    assert src.count_rows() == 2
    assert src.count_columns() == 3


def test_empty_collection_counts_zero():
    src = _make_source([])

    assert src.count_rows() == 0
    assert src.count_columns() == 0
    assert src.get_data(True) == []


def test_non_sequence_collection_counts_zero():
    src = _make_source({"a": [1, 2]})

    assert src.count_rows() == 0
    assert src.count_columns() == 0
    assert src.get_at_row(0) is None
    assert src.get_at_column(0) == []


def test_column_count_falls_back_to_second_record():
    assert _make_source([None, [1, 2, 3]]).count_columns() == 3
    assert _make_source([None, None, [1]]).count_columns() == 0


def test_column_count_ignores_records_past_the_sample():
    assert _make_source([[1], [1, 2, 3]]).count_columns() == 1


def test_numpy_backing_collection():
    src = _make_source(np.arange(6).reshape(2, 3))

    assert src.count_rows() == 2
    assert src.count_columns() == 3
    assert src.get_at_cell(1, 2) == 5
    assert src.get_at_column(0) == [0, 3]
    assert src.get_data(True) == [[0, 1, 2], [3, 4, 5]]


def test_row_override_replaces_record():
    calls = []

    def override(row):
        calls.append(row)
        return ["x", "y", "z"] if row == 0 else row

    src = _make_source(row_override=override)

    assert src.get_at_cell(0, 1) == "y"
    assert src.get_at_cell(1, 1) == 5
    assert calls == [0, 1]


def test_row_override_none_or_nan():
    assert _make_source(row_override=lambda row: None).get_at_cell(0, 0) == 1
    assert _make_source(row_override=lambda row: float("nan")).get_at_cell(0, 0) is None


def test_row_override_not_used_by_row_column_or_range():
    src = _make_source(row_override=lambda row: ["x", "y", "z"])

    assert src.get_at_row(0) == [1, 2, 3]
    assert src.get_at_column(0) == [1, 4]
    assert src.get_by_range((0, 0), (0, 0)) == [[1]]


def test_set_at_cell_writes_stored_record():
    data = [[1, 2, 3], [4, 5, 6]]
    src = _make_source(data)

    src.set_at_cell(0, 1, 20)

    assert data[0] == [1, 20, 3]
    assert src.get_at_cell(0, 1) == 20


def test_set_at_cell_missing_row_raises():
    src = _make_source()

    with pytest.raises(IndexError):
        src.set_at_cell(5, 0, 1)


def test_grid_snapshot_without_sample_record():
    src = _make_source([None, None, [1, 2]])

    assert src.count_columns() == 0
    assert src.get_data(True) == [[], [], [1]]


def test_range_accepts_list_corners():
    src = _make_source([[1, 2], [3, 4]])

    assert src.get_by_range([1, 1], [0, 0]) == [[1, 2], [3, 4]]


def test_row_override_decimal_index_reads_stored_record():
    src = _make_source(row_override=lambda row: Decimal(row))

    assert src.get_at_cell(1, 2) == 6
