"""
Data source configuration.
The representation tag lives here so it is fixed for the lifetime of a source.
"""

from __future__ import annotations

from dataclasses import dataclass

from .schema import POSITIONAL, REPRESENTATIONS, Representation


@dataclass(frozen=True)
class DataSourceConfig:
    representation: Representation = POSITIONAL

    # nested string fields ("a.b.c") are split on this
    path_separator: str = "."

    # count_columns() looks at up to this many leading records for a sample
    column_sample_size: int = 2

    def __post_init__(self) -> None:
        if self.representation not in REPRESENTATIONS:
            raise ValueError(
                f"Unknown representation {self.representation!r}; "
                f"expected one of {REPRESENTATIONS}."
            )
        if not self.path_separator:
            raise ValueError("path_separator must be a non-empty string.")
        if self.column_sample_size < 1:
            raise ValueError("column_sample_size must be at least 1.")
