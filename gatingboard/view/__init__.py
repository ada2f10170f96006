"""Row view: expansion control, detail panels, row composition."""

from gatingboard.view.expansion import (
    ExpansionContext,
    RowController,
    build_state_link,
    seed_expanded_id,
    toggle_row,
)
from gatingboard.view.panels import DataPanel, Panel, Segment, compose_details, linkify
from gatingboard.view.rows import RowFace, RowView, build_face, render_row

__all__ = [
    "DataPanel",
    "ExpansionContext",
    "Panel",
    "RowController",
    "RowFace",
    "RowView",
    "Segment",
    "build_face",
    "build_state_link",
    "compose_details",
    "linkify",
    "render_row",
    "seed_expanded_id",
    "toggle_row",
]
