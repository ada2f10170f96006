"""Detail panels shown for an expanded gating row.

Each panel runs the field extractor over its own mapping table and
source record.  A panel with nothing to show is None and is not rendered.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from gatingboard.extraction.field_mapping import (
    RESULT_MAPPING,
    WAIVER_MAPPING,
    extract_pairs,
    has_labeled_fields,
    stringify,
    without_transforms,
)
from gatingboard.gating.state import GatingState


# URL-shaped substrings inside result data values
_URL_RE = re.compile(r"\b(?:(?:https?|ftp)://|www\.)[^\s<>\"']+", re.IGNORECASE)
_TRAILING_PUNCT = ".,;:!?)]}"


@dataclass(frozen=True)
class Segment:
    """A piece of a data value: plain text, or a link when ``href`` is set."""

    text: str
    href: str | None = None


@dataclass(frozen=True)
class Panel:
    """A captioned list of label/value pairs."""

    caption: str
    color: str
    pairs: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class DataItem:
    """One key of the result's free-form data with its values."""

    name: str
    values: tuple[tuple[Segment, ...], ...]


@dataclass(frozen=True)
class DataPanel:
    """The result-data panel."""

    caption: str
    color: str
    items: tuple[DataItem, ...]


def linkify(text: str) -> list[Segment]:
    """Split *text* into plain and URL segments.

    Trailing punctuation is left outside the link so ``see http://x.`` links
    ``http://x``.  Bare ``www.`` hosts link to their ``http://`` address.
    """
    segments: list[Segment] = []
    pos = 0
    for match in _URL_RE.finditer(text):
        url = match.group(0).rstrip(_TRAILING_PUNCT)
        start = match.start()
        end = start + len(url)
        if start > pos:
            segments.append(Segment(text[pos:start]))
        href = "http://" + url if url[:4].lower() == "www." else url
        segments.append(Segment(url, href=href))
        pos = end
    if pos < len(text) or not segments:
        segments.append(Segment(text[pos:]))
    return segments


def _mk_panel(caption: str, color: str, pairs: list[tuple[str, str]]) -> Panel | None:
    if not pairs:
        return None
    return Panel(caption=caption, color=color, pairs=tuple(pairs))


def _table(mapping: tuple, human_timestamps: bool) -> tuple:
    return mapping if human_timestamps else without_transforms(mapping)


def result_info_panel(state: GatingState, human_timestamps: bool = True) -> Panel | None:
    if state.result is None:
        return None
    table = _table(RESULT_MAPPING, human_timestamps)
    return _mk_panel("Result info", "orange", extract_pairs(table, state.result))


def waiver_panel(state: GatingState, human_timestamps: bool = True) -> Panel | None:
    if state.waiver is None:
        return None
    table = _table(WAIVER_MAPPING, human_timestamps)
    return _mk_panel("Waiver info", "red", extract_pairs(table, state.waiver))


def requirement_panel(state: GatingState, human_timestamps: bool = True) -> Panel | None:
    """Requirement info, using the waiver table on the requirement record."""
    if not has_labeled_fields(state.requirement):
        return None
    table = _table(WAIVER_MAPPING, human_timestamps)
    return _mk_panel("Requirement info", "blue", extract_pairs(table, state.requirement))


def result_data_panel(state: GatingState, linkify_values: bool = True) -> DataPanel | None:
    """Render ``result.data`` (name -> list of values), links detected.

    A scalar value is shown as a one-element list.  Absent, non-mapping,
    or empty data gives None.
    """
    data: Any = state.result.get("data") if state.result is not None else None
    if not isinstance(data, Mapping) or not data:
        return None

    items: list[DataItem] = []
    for name, raw_values in data.items():
        if raw_values is None:
            values_list: list[Any] = []
        elif isinstance(raw_values, (list, tuple)):
            values_list = list(raw_values)
        else:
            values_list = [raw_values]
        rendered: list[tuple[Segment, ...]] = []
        for value in values_list:
            text = stringify(value)
            if linkify_values:
                rendered.append(tuple(linkify(text)))
            else:
                rendered.append((Segment(text),))
        items.append(DataItem(name=str(name), values=tuple(rendered)))

    return DataPanel(caption="Result data", color="cyan", items=tuple(items))


def compose_details(
    state: GatingState,
    linkify_values: bool = True,
    human_timestamps: bool = True,
) -> list[Panel | DataPanel]:
    """Build the non-empty detail panels of an expanded row, in display order."""
    panels = [
        result_info_panel(state, human_timestamps),
        waiver_panel(state, human_timestamps),
        result_data_panel(state, linkify_values=linkify_values),
        requirement_panel(state, human_timestamps),
    ]
    return [p for p in panels if p is not None]
