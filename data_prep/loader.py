"""
Loading tabular files and DataFrames into backing collections, and back.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Union

import pandas as pd

from core.schema import KEYED, POSITIONAL, Representation
from core.utils import require_columns

if TYPE_CHECKING:
    from datasource.source import DataSource

logger = logging.getLogger(__name__)

_EXCEL_ENGINES = {".xlsx": "openpyxl", ".xls": "xlrd"}


def load_table(path: Union[str, Path], *, low_memory: bool = False) -> pd.DataFrame:
    """Read a .csv, .xlsx or .xls file into a DataFrame."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        df = pd.read_csv(path, low_memory=low_memory)
    elif suffix in _EXCEL_ENGINES:
        df = pd.read_excel(path, engine=_EXCEL_ENGINES[suffix])
    else:
        raise ValueError(f"Unsupported file type {suffix!r}; expected .csv, .xlsx or .xls.")
    logger.debug("Loaded %s: %d rows x %d columns", path.name, df.shape[0], df.shape[1])
    return df


def records_from_frame(
    df: pd.DataFrame,
    representation: Representation,
    *,
    columns: Optional[Sequence[str]] = None,
) -> List[Any]:
    """
    Convert DataFrame rows to records: dicts keyed by column label (keyed) or
    lists in column order (positional). Missing cells become None.
    """
    if columns is not None:
        require_columns(df, columns)
        df = df.loc[:, list(columns)]

    clean = df.astype(object).where(pd.notna(df), None)
    clean.columns = [str(c) for c in clean.columns]

    if representation == KEYED:
        return clean.to_dict(orient="records")
    if representation == POSITIONAL:
        return clean.values.tolist()
    raise ValueError(f"Unknown representation {representation!r}.")


def load_records(
    path: Union[str, Path],
    representation: Optional[Representation] = None,
    *,
    columns: Optional[Sequence[str]] = None,
    low_memory: bool = False,
) -> List[Any]:
    """Load a tabular file straight into records. Keyed unless told otherwise."""
    df = load_table(path, low_memory=low_memory)
    return records_from_frame(df, representation or KEYED, columns=columns)


def frame_from_source(source: "DataSource") -> pd.DataFrame:
    """
    Snapshot a data source into a DataFrame (one row per record, one column per
    visual column). Columns are labelled by their string field, else by index.
    """
    grid = source.get_data(as_grid=True)
    # rows can be narrower than the widest one (absent records, short sequences)
    width = max((len(row) for row in grid), default=0)
    grid = [list(row) + [None] * (width - len(row)) for row in grid]

    labels = []
    for column in range(width):
        field = source.column_to_field(column)
        labels.append(field if isinstance(field, str) else column)
    return pd.DataFrame(grid, columns=labels)
