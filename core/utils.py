from __future__ import annotations

import numbers
from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any, Iterable

import numpy as np
import pandas as pd


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def is_sequence(value: Any) -> bool:
    """True for ordered, indexable containers (lists, tuples, ndarrays), never for strings."""
    if isinstance(value, (str, bytes, bytearray)):
        return False
    if isinstance(value, np.ndarray):
        return value.ndim >= 1
    return isinstance(value, Sequence)


def is_absent(record: Any) -> bool:
    """A record is absent when it is None or a scalar NA (NaN, pd.NA, NaT)."""
    if record is None:
        return True
    return bool(pd.api.types.is_scalar(record) and pd.isna(record))


def is_row_index(value: Any) -> bool:
    """
    Whether a row-override answer means "no override, read the stored row".
    Non-complex numbers (bools, Decimals and numpy scalars included) qualify
    unless NaN; so does None.
    """
    if value is None:
        return True
    if isinstance(value, numbers.Complex) and not isinstance(value, numbers.Real):
        return False
    if isinstance(value, numbers.Number):
        return bool(value == value)  # NaN is the only value unequal to itself
    return False


def lookup(record: Any, key: Any) -> Any:
    """Direct key/index read that yields None instead of raising on a miss."""
    if record is None:
        return None
    if isinstance(record, Mapping):
        try:
            return record.get(key)
        except TypeError:  # unhashable key
            return None
    if is_sequence(record):
        if isinstance(key, numbers.Integral) and not isinstance(key, bool):
            if 0 <= key < len(record):
                return record[key]
    return None


def _step(current: Any, part: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(part)
    if is_sequence(current) and part.isdigit():
        return lookup(current, int(part))
    return None


def get_property(obj: Any, path: str, sep: str = ".") -> Any:
    """Nested read of a dot-delimited path, e.g. get_property(row, "address.city")."""
    current = obj
    for part in path.split(sep):
        if current is None:
            return None
        current = _step(current, part)
    return current


def set_property(obj: Any, path: str, value: Any, sep: str = ".") -> None:
    """Nested write of a dot-delimited path; missing intermediate mappings are created."""
    parts = path.split(sep)
    current = obj
    for part in parts[:-1]:
        nxt = _step(current, part)
        if nxt is None:
            if not isinstance(current, MutableMapping):
                raise TypeError(f"Cannot create {part!r} inside {type(current).__name__}.")
            nxt = {}
            current[part] = nxt
        current = nxt

    last = parts[-1]
    if isinstance(current, MutableMapping):
        current[last] = value
    elif is_sequence(current) and last.isdigit():
        current[int(last)] = value
    else:
        raise TypeError(f"Cannot assign {last!r} on {type(current).__name__}.")
