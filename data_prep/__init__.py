"""
Data preparation — loading tables into records, converting back, validation.
"""

from .loader import frame_from_source, load_records, load_table, records_from_frame
from .validators import ValidationResult, infer_representation, validate_records

__all__ = [
    "load_table",
    "load_records",
    "records_from_frame",
    "frame_from_source",
    "ValidationResult",
    "infer_representation",
    "validate_records",
]
