"""Row composition: the always-visible face and the lazily built details."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from gatingboard.gating.aggregator import Badges, derive_badges
from gatingboard.gating.commands import Emit, RerunAction, WaiveAction
from gatingboard.gating.state import GatingState
from gatingboard.view.expansion import ExpansionContext, RowController, build_state_link
from gatingboard.view.panels import DataPanel, Panel, compose_details


@dataclass
class RowFace:
    """Collapsed view of a row: icon, name, badges, actions, link."""

    testcase: str
    badges: Badges
    waive: WaiveAction | None
    rerun: RerunAction | None
    state_link: str | None

    @property
    def labels(self) -> list[str]:
        return self.badges.labels


@dataclass
class RowView:
    """A rendered row.  ``details`` is None while the row is collapsed."""

    face: RowFace
    controller: RowController
    details: list[Panel | DataPanel] | None

    @property
    def is_expanded(self) -> bool:
        return self.controller.is_expanded


def build_face(
    state: GatingState,
    artifact: dict[str, Any],
    emit: Emit,
    dashboard_url: str | None = None,
) -> RowFace:
    """Build the row face; disabled actions are left out."""
    waive = WaiveAction(artifact, state, emit)
    rerun = RerunAction(state, emit)
    link = build_state_link(dashboard_url, state.testcase) if dashboard_url else None
    return RowFace(
        testcase=state.testcase,
        badges=derive_badges(state),
        waive=waive if waive.enabled else None,
        rerun=rerun if rerun.enabled else None,
        state_link=link,
    )


def render_row(
    state: GatingState,
    artifact: dict[str, Any],
    context: ExpansionContext,
    emit: Emit,
    dashboard_url: str | None = None,
    linkify_values: bool = True,
    human_timestamps: bool = True,
) -> RowView:
    """Render one gating row.

    Detail panels are only computed when the row is expanded.
    """
    controller = RowController(context, state.testcase)
    face = build_face(state, artifact, emit, dashboard_url=dashboard_url)
    details = None
    if controller.is_expanded:
        details = compose_details(
            state,
            linkify_values=linkify_values,
            human_timestamps=human_timestamps,
        )
    return RowView(face=face, controller=controller, details=details)
