"""Field extraction: mapping tables, dot-path lookup, value formatting."""

from gatingboard.extraction.field_mapping import (
    ABSENT,
    LABELED_FIELDS,
    RESULT_MAPPING,
    WAIVER_MAPPING,
    FieldSpec,
    extract_pairs,
    has_labeled_fields,
    human_timestamp,
    resolve_path,
)
from gatingboard.extraction.timestamps import timestamp_for_user

__all__ = [
    "ABSENT",
    "FieldSpec",
    "LABELED_FIELDS",
    "RESULT_MAPPING",
    "WAIVER_MAPPING",
    "extract_pairs",
    "has_labeled_fields",
    "human_timestamp",
    "resolve_path",
    "timestamp_for_user",
]
