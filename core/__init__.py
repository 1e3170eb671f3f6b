"""
Core package — schema definitions, configuration, errors, and shared utilities.
No business logic lives here.
"""

from .schema import KEYED, POSITIONAL, REPRESENTATIONS, CellCoords, coerce_coords
from .config import DataSourceConfig
from .errors import DisposedDataSourceError
from .utils import (
    get_property,
    is_absent,
    is_row_index,
    is_sequence,
    lookup,
    require_columns,
    set_property,
)

__all__ = [
    "KEYED",
    "POSITIONAL",
    "REPRESENTATIONS",
    "CellCoords",
    "coerce_coords",
    "DataSourceConfig",
    "DisposedDataSourceError",
    "get_property",
    "is_absent",
    "is_row_index",
    "is_sequence",
    "lookup",
    "require_columns",
    "set_property",
]
