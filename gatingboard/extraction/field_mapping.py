"""Declarative field extraction for detail panels.

A mapping table is an ordered sequence of ``(path, label, transform)``
entries.  ``extract_pairs`` walks the table against a source record and
returns ``(label, value)`` pairs in table order, omitting any entry whose
path does not resolve.  The same extractor serves every detail panel; only
the table and the source record change.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable

from gatingboard.extraction.timestamps import timestamp_for_user


# Transform signature: (raw value, source record) -> display string
Transform = Callable[[Any, Any], str]

# Fields shared by waiver records and requirement records
LABELED_FIELDS: tuple[str, ...] = (
    "comment",
    "id",
    "scenario",
    "timestamp",
    "username",
    "waived",
)


class _Absent:
    """Sentinel for a path that did not resolve."""

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Any = _Absent()


@dataclass(frozen=True)
class FieldSpec:
    """One row of a mapping table."""

    path: str
    label: str
    transform: Transform | None = None


def human_timestamp(value: Any, record: Any = None) -> str:
    """Transform rendering a timestamp in the short human-readable form."""
    return timestamp_for_user(value, cut=True)


def resolve_path(source: Any, path: str) -> Any:
    """Look up a dot-separated *path* in *source*.

    Mappings are indexed by key.  A segment made of digits also indexes
    into lists and tuples (``data.rebuild.0``).  Anything that cannot be
    followed resolves to ``ABSENT``; ``None`` values are treated the same
    way so that JSON ``null`` and a missing key look alike.

    Args:
        source: Record to read from (usually a dict from upstream JSON).
        path: Dot-separated accessor, e.g. ``testcase.ref_url``.

    Returns:
        The resolved value, or ``ABSENT``.
    """
    if not path:
        return ABSENT
    current = source
    for segment in path.split("."):
        if isinstance(current, Mapping):
            if segment not in current:
                return ABSENT
            current = current[segment]
        elif (
            isinstance(current, Sequence)
            and not isinstance(current, (str, bytes))
            and segment.isdigit()
        ):
            index = int(segment)
            if index >= len(current):
                return ABSENT
            current = current[index]
        else:
            return ABSENT
        # Deliberate: upstream JSON null is treated as a missing key.
        if current is None:
            return ABSENT
    return current


def stringify(value: Any) -> str:
    """Render a raw field value as display text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(stringify(v) for v in value)
    return str(value)


def normalize_mapping(
    mapping: Sequence[FieldSpec | Sequence[Any]],
) -> tuple[FieldSpec, ...]:
    """Coerce plain ``(path, label[, transform])`` tuples into FieldSpecs."""
    specs: list[FieldSpec] = []
    for entry in mapping:
        if isinstance(entry, FieldSpec):
            specs.append(entry)
        else:
            specs.append(FieldSpec(*entry))
    return tuple(specs)


def has_labeled_fields(source: Any) -> bool:
    """Return True if *source* carries any of the shared labeled fields.

    Waiver and requirement records are unrelated shapes that both expose
    ``comment/id/scenario/timestamp/username/waived``.  This is the shape
    check applied before one mapping table is reused across them.
    """
    if not isinstance(source, Mapping):
        return False
    return any(resolve_path(source, name) is not ABSENT for name in LABELED_FIELDS)


def extract_pairs(
    mapping: Sequence[FieldSpec | Sequence[Any]],
    source: Any,
) -> list[tuple[str, str]]:
    """Extract ordered ``(label, value)`` pairs from *source*.

    Entries whose path is absent are skipped.  Present values, including
    falsy ones like ``""`` or ``0``, are passed through the entry's
    transform or stringified.  An empty list means there is nothing to
    show and the caller suppresses its panel.

    Args:
        mapping: Ordered table of FieldSpec (or equivalent tuples).
        source: Record to read from.  Non-mapping sources yield nothing.

    Returns:
        List of ``(label, display value)`` in mapping order.
    """
    if not isinstance(source, Mapping):
        return []
    pairs: list[tuple[str, str]] = []
    for spec in normalize_mapping(mapping):
        value = resolve_path(source, spec.path)
        if value is ABSENT:
            continue
        if spec.transform is not None:
            rendered = spec.transform(value, source)
        else:
            rendered = stringify(value)
        pairs.append((spec.label, rendered))
    return pairs


# Result-info panel table
RESULT_MAPPING: tuple[FieldSpec, ...] = (
    FieldSpec("submit_time", "submited", human_timestamp),
    FieldSpec("id", "result id"),
    FieldSpec("href", "resultsdb url"),
    FieldSpec("note", "note"),
    FieldSpec("outcome", "outcome"),
    # resultsdb-updater stores the testcase documentation link here
    FieldSpec("testcase.ref_url", "testcase info"),
)

# Waiver-info and requirement-info panel table
WAIVER_MAPPING: tuple[FieldSpec, ...] = (
    FieldSpec("comment", "comment"),
    FieldSpec("id", "id"),
    FieldSpec("scenario", "scenario"),
    FieldSpec("timestamp", "time", human_timestamp),
    FieldSpec("username", "username"),
    FieldSpec("waived", "waived"),
)


def without_transforms(mapping: Sequence[FieldSpec | Sequence[Any]]) -> tuple[FieldSpec, ...]:
    """Return *mapping* with every transform dropped (raw values shown)."""
    return tuple(FieldSpec(spec.path, spec.label) for spec in normalize_mapping(mapping))
