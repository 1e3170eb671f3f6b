from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal, Mapping, Sequence, Tuple, Union

# Physical layout of every record held by a data source.
Representation = Literal["positional", "keyed"]

POSITIONAL: Representation = "positional"
KEYED: Representation = "keyed"
REPRESENTATIONS: Tuple[str, ...] = (POSITIONAL, KEYED)

Record = Union[Sequence[Any], Mapping[Any, Any]]

# Called as reader `fn(record)` or writer `fn(target, value)`.
FieldAccessor = Callable[..., Any]
FieldIdentifier = Union[str, int, FieldAccessor, None]


@dataclass(frozen=True)
class CellCoords:
    """A (physical row, visual column) corner of a range."""
    row: int
    col: int


def coerce_coords(value: Any) -> CellCoords:
    """Accept CellCoords, a {"row": .., "col": ..} mapping, or a (row, col) pair as tuple or list."""
    if isinstance(value, CellCoords):
        return value
    if isinstance(value, Mapping):
        missing = [k for k in ("row", "col") if k not in value]
        if missing:
            raise ValueError(f"Range corner is missing keys: {missing}")
        return CellCoords(row=int(value["row"]), col=int(value["col"]))
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)) and len(value) == 2:
        return CellCoords(row=int(value[0]), col=int(value[1]))
    raise ValueError(f"Cannot interpret {value!r} as a range corner.")
