"""HTML rendering of an artifact's gating states.

Generates a self-contained HTML page with one row per test case: status
glyph, name, gating/waiver badges, waive/rerun controls and a stable
link.  Only the expanded row carries its detail panels.
"""

from __future__ import annotations

import html
from pathlib import Path
from typing import Any

from gatingboard.gating.commands import CommandLog, Emit
from gatingboard.gating.state import GatingState
from gatingboard.view.expansion import ExpansionContext
from gatingboard.view.panels import DataPanel, Panel, Segment
from gatingboard.view.rows import RowView, render_row


# Icon category color mapping
CATEGORY_COLORS: dict[str, str] = {
    "passed": "#90EE90",
    "failed": "#FFB6C1",
    "error": "#FFA07A",
    "missing": "#FFFFAD",
    "info": "#87CEEB",
    "pending": "#B0C4DE",
    "unknown": "#D3D3D3",
}

# Icon category glyphs
CATEGORY_GLYPHS: dict[str, str] = {
    "passed": "&#10004;",
    "failed": "&#10008;",
    "error": "&#9888;",
    "missing": "&#63;",
    "info": "&#8505;",
    "pending": "&#8987;",
    "unknown": "&#8226;",
}

# Badge label -> color
BADGE_COLORS: dict[str, str] = {
    "required for gating": "#73BCF7",
    "waived": "#F9A8A8",
}

# Panel color names -> CSS colors
PANEL_COLORS: dict[str, str] = {
    "orange": "#F4B678",
    "red": "#F9A8A8",
    "blue": "#73BCF7",
    "cyan": "#A2D9D9",
}

_CSS = """\
body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    padding: 20px;
    background: #f5f5f5;
    color: #333;
}
.report-header {
    background: #fff;
    border-radius: 8px;
    padding: 20px;
    margin-bottom: 20px;
    box-shadow: 0 1px 3px rgba(0,0,0,0.1);
}
.report-header h1 {
    margin: 0 0 10px 0;
    font-size: 24px;
}
.meta {
    color: #666;
    font-size: 14px;
}
.summary {
    display: flex;
    gap: 20px;
    flex-wrap: wrap;
    margin-top: 15px;
}
.summary-item {
    padding: 10px 16px;
    border-radius: 6px;
    font-weight: 600;
    font-size: 14px;
}
.gating-row {
    border-left: 4px solid #ddd;
    margin: 8px 0;
    padding: 8px 12px;
    background: #fff;
    border-radius: 0 6px 6px 0;
}
.row-face {
    display: flex;
    align-items: center;
    gap: 10px;
}
.row-name {
    font-weight: 600;
    font-size: 14px;
    flex: 1;
}
.status-glyph {
    display: inline-block;
    width: 1.4em;
    text-align: center;
    border-radius: 50%;
}
.status-badge {
    display: inline-block;
    padding: 3px 10px;
    border-radius: 12px;
    font-size: 12px;
    font-weight: 600;
    color: #333;
}
.action-button {
    font-size: 12px;
    padding: 2px 8px;
    border: 1px solid #bbb;
    border-radius: 4px;
    background: #f4f6f9;
    color: #222;
    text-decoration: none;
}
.state-link {
    font-size: 12px;
}
.panel {
    margin-top: 10px;
}
.panel-caption {
    font-size: 13px;
    color: #555;
    font-weight: 600;
    margin-bottom: 4px;
}
.panel dl {
    display: grid;
    grid-template-columns: max-content auto;
    gap: 2px 12px;
    margin: 0;
    font-size: 13px;
}
.panel dt {
    font-weight: 600;
}
.panel dd {
    margin: 0;
}
.panel dd span {
    padding: 1px 6px;
    border-radius: 4px;
}
"""


def generate_html_report(
    artifact: dict[str, Any],
    states: list[GatingState],
    expanded_id: str = "",
    dashboard_url: str | None = None,
    title: str = "Gating Status",
    linkify_values: bool = True,
    human_timestamps: bool = True,
    emit: Emit | None = None,
) -> str:
    """Generate a self-contained HTML page for an artifact's gating states.

    Args:
        artifact: Owning artifact (shown in the header, carried by waive
            commands).
        states: Merged gating states, rendered in the given order.
        expanded_id: Test case whose details are rendered ("" for none).
        dashboard_url: Base URL for per-test links; None omits links.
        title: Page title.
        linkify_values: Render URL-shaped result data values as links.
        human_timestamps: Format timestamps for humans.
        emit: Command sink handed to the row actions.

    Returns:
        Complete HTML string.
    """
    context = ExpansionContext(expanded_id)
    sink: Emit = emit if emit is not None else CommandLog()
    parts: list[str] = []

    parts.append("<!DOCTYPE html>")
    parts.append('<html lang="en">')
    parts.append("<head>")
    parts.append('<meta charset="UTF-8">')
    parts.append(f"<title>{html.escape(title)}</title>")
    parts.append(f"<style>{_CSS}</style>")
    parts.append("</head>")
    parts.append("<body>")

    rows = [
        render_row(
            state,
            artifact,
            context,
            sink,
            dashboard_url=dashboard_url,
            linkify_values=linkify_values,
            human_timestamps=human_timestamps,
        )
        for state in states
    ]
    parts.append(_render_header(title, artifact, rows))
    parts.append('<div class="gating-rows">')
    for row in rows:
        parts.append(_render_row(row))
    parts.append("</div>")

    parts.append("</body>")
    parts.append("</html>")
    return "\n".join(parts)


def write_html_report(html_content: str, output_path: Path) -> None:
    """Write an HTML report to a file, creating parent directories."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        f.write(html_content)


def _render_header(
    title: str, artifact: dict[str, Any], rows: list[RowView],
) -> str:
    """Render the page header with artifact identity and badge counts."""
    parts: list[str] = []
    parts.append('<div class="report-header">')
    parts.append(f"<h1>{html.escape(title)}</h1>")

    meta_parts: list[str] = []
    for key in ("type", "aid", "nvr"):
        if artifact.get(key) is not None:
            meta_parts.append(
                f"{html.escape(key)}: {html.escape(str(artifact[key]))}"
            )
    if meta_parts:
        parts.append(f'<div class="meta">{" | ".join(meta_parts)}</div>')

    gating = sum(1 for r in rows if r.face.badges.is_gating_result)
    waived = sum(1 for r in rows if r.face.badges.is_waived)
    parts.append('<div class="summary">')
    parts.append(
        f'<div class="summary-item" style="background:#e8e8e8">'
        f"Total: {len(rows)}</div>"
    )
    if gating:
        parts.append(
            f'<div class="summary-item" style="background:{BADGE_COLORS["required for gating"]}">'
            f"Required for gating: {gating}</div>"
        )
    if waived:
        parts.append(
            f'<div class="summary-item" style="background:{BADGE_COLORS["waived"]}">'
            f"Waived: {waived}</div>"
        )
    parts.append("</div>")
    parts.append("</div>")
    return "\n".join(parts)


def _render_row(row: RowView) -> str:
    """Render one gating row with its face and, if expanded, its details."""
    face = row.face
    category = face.badges.icon_category
    color = CATEGORY_COLORS.get(category, "#e8e8e8")
    glyph = CATEGORY_GLYPHS.get(category, CATEGORY_GLYPHS["unknown"])
    name = html.escape(face.testcase, quote=True)

    parts: list[str] = []
    expanded_attr = "true" if row.is_expanded else "false"
    parts.append(
        f'<div class="gating-row" style="border-left-color:{color}"'
        f' data-testcase="{name}" aria-expanded="{expanded_attr}">'
    )
    parts.append('<div class="row-face">')
    parts.append(
        f'<span class="status-glyph" style="background:{color}"'
        f' title="{html.escape(face.badges.icon_key, quote=True)}">{glyph}</span>'
    )
    parts.append(f'<span class="row-name">{html.escape(face.testcase)}</span>')
    for label in face.labels:
        parts.append(
            f'<span class="status-badge" style="background:{BADGE_COLORS[label]}">'
            f"{html.escape(label)}</span>"
        )
    if face.waive is not None:
        parts.append(
            f'<button class="action-button" data-action="waive"'
            f' data-testcase="{name}">{face.waive.label}</button>'
        )
    if face.rerun is not None and face.rerun.url is not None:
        parts.append(
            f'<a class="action-button" href="{html.escape(face.rerun.url, quote=True)}"'
            f' target="_blank" rel="noopener noreferrer"'
            f' title="{html.escape(face.rerun.title, quote=True)}">'
            f"{face.rerun.label}</a>"
        )
    if face.state_link:
        parts.append(
            f'<a class="state-link" href="{html.escape(face.state_link, quote=True)}">'
            f"link</a>"
        )
    parts.append("</div>")

    if row.details:
        for panel in row.details:
            if isinstance(panel, DataPanel):
                parts.append(_render_data_panel(panel))
            else:
                parts.append(_render_panel(panel))

    parts.append("</div>")
    return "\n".join(parts)


def _render_panel(panel: Panel) -> str:
    """Render a label/value panel as a description list."""
    color = PANEL_COLORS.get(panel.color, "#e8e8e8")
    parts: list[str] = []
    parts.append('<div class="panel">')
    parts.append(f'<div class="panel-caption">{html.escape(panel.caption)}</div>')
    parts.append("<dl>")
    for label, value in panel.pairs:
        parts.append(f"<dt>{html.escape(label)}</dt>")
        parts.append(
            f'<dd><span style="background:{color}">{html.escape(value)}</span></dd>'
        )
    parts.append("</dl>")
    parts.append("</div>")
    return "\n".join(parts)


def _render_segments(segments: tuple[Segment, ...]) -> str:
    rendered: list[str] = []
    for seg in segments:
        if seg.href is not None:
            rendered.append(
                f'<a href="{html.escape(seg.href, quote=True)}" target="_blank"'
                f' rel="noopener noreferrer">{html.escape(seg.text)}</a>'
            )
        else:
            rendered.append(html.escape(seg.text))
    return "".join(rendered)


def _render_data_panel(panel: DataPanel) -> str:
    """Render the result-data panel with linkified values."""
    color = PANEL_COLORS.get(panel.color, "#e8e8e8")
    parts: list[str] = []
    parts.append('<div class="panel">')
    parts.append(f'<div class="panel-caption">{html.escape(panel.caption)}</div>')
    parts.append("<dl>")
    for item in panel.items:
        values = " ".join(_render_segments(v) for v in item.values)
        parts.append(f"<dt>{html.escape(item.name)}</dt>")
        parts.append(f'<dd><span style="background:{color}">{values}</span></dd>')
    parts.append("</dl>")
    parts.append("</div>")
    return "\n".join(parts)
