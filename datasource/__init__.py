"""
Data source — uniform cell/row/column/range access over positional or keyed records.
"""

from .mapping import ColumnMapping
from .source import DataSource, RowOverride

__all__ = [
    "ColumnMapping",
    "DataSource",
    "RowOverride",
]
