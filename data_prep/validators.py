"""
Shape checks for a backing collection before it is handed to a DataSource.

Accessors never raise on malformed data, so problems surface here instead:
- Collection is not an ordered sequence
- Records of the wrong kind for the representation
- Null records
- Records whose shape differs from the column-count sample
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, List

from core.schema import KEYED, POSITIONAL, Record, Representation
from core.utils import is_absent, is_sequence


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a collection."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def infer_representation(records: Any) -> Representation:
    """Keyed when the first present record is a mapping, positional otherwise."""
    if is_sequence(records):
        for record in records:
            if not is_absent(record):
                return KEYED if isinstance(record, Mapping) else POSITIONAL
    return POSITIONAL


def _shape(record: Record, representation: Representation) -> Any:
    if representation == KEYED:
        return frozenset(record.keys())
    return len(record)


def validate_records(
    records: Any,
    representation: Representation,
    *,
    column_sample_size: int = 2,
) -> ValidationResult:
    """
    Run all shape checks on a backing collection.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()

    # --- Collection ---
    if not is_sequence(records):
        result.errors.append(
            f"Backing collection must be an ordered sequence, got {type(records).__name__}."
        )
        return result

    n = len(records)
    if n == 0:
        result.warnings.append("Collection is empty (0 records).")
        return result

    # --- Record kinds ---
    present = [i for i in range(n) if not is_absent(records[i])]
    n_null = n - len(present)
    if n_null > 0:
        result.warnings.append(f"{n_null} records are null.")

    if representation == KEYED:
        wrong = [i for i in present if not isinstance(records[i], Mapping)]
        kind = "mappings"
    else:
        wrong = [i for i in present if not is_sequence(records[i])]
        kind = "sequences"
    if wrong:
        result.errors.append(
            f"{len(wrong)} records are not {kind} as {representation!r} requires "
            f"(first at row {wrong[0]})."
        )
        return result  # shapes are meaningless past this point

    # --- Shape sample ---
    sample_rows = [i for i in present if i < column_sample_size]
    if not sample_rows:
        result.warnings.append(
            f"No record within the first {column_sample_size} rows; "
            f"column count will be reported as 0."
        )
        return result

    expected = _shape(records[sample_rows[0]], representation)
    n_mismatch = sum(1 for i in present if _shape(records[i], representation) != expected)
    if n_mismatch > 0:
        what = "field set" if representation == KEYED else "length"
        result.warnings.append(
            f"{n_mismatch} records differ in {what} from the sample at row "
            f"{sample_rows[0]}; columns beyond the sample are not counted."
        )

    return result
