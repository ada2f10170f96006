"""Expand/collapse control for gating rows.

Only one test case per artifact view is expanded at a time.  The parent
view owns the "currently expanded id" and passes it down as an
ExpansionContext; rows change it only through ``toggle_row``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Callable
from urllib.parse import parse_qs, quote

from gatingboard.gating.commands import ClickEvent
from gatingboard.gating.state import GatingState


class ExpansionContext:
    """Shared expanded-id value plus its setter.

    Args:
        expanded_id: Initial expanded test case name ("" for none), e.g.
            seeded from a deep link.
        on_change: Optional callback invoked with the new id after every
            change.
    """

    def __init__(
        self,
        expanded_id: str = "",
        on_change: Callable[[str], None] | None = None,
    ) -> None:
        self._expanded_id = expanded_id
        self._on_change = on_change

    @property
    def expanded_id(self) -> str:
        return self._expanded_id

    def set_expanded(self, testcase: str) -> None:
        self._expanded_id = testcase
        if self._on_change is not None:
            self._on_change(testcase)


def toggle_row(context: ExpansionContext, testcase: str) -> str:
    """Toggle *testcase* and return the new expanded id.

    Toggling the expanded row collapses it; toggling any other row expands
    that row instead.
    """
    if context.expanded_id == testcase:
        context.set_expanded("")
    else:
        context.set_expanded(testcase)
    return context.expanded_id


class RowController:
    """Binds one row to the shared expansion context."""

    def __init__(self, context: ExpansionContext, testcase: str) -> None:
        self.context = context
        self.testcase = testcase

    @property
    def is_expanded(self) -> bool:
        return bool(self.testcase) and self.context.expanded_id == self.testcase

    def toggle(self) -> str:
        return toggle_row(self.context, self.testcase)

    def click(self, event: ClickEvent | None = None) -> bool:
        """Handle a click on the row; returns True if it toggled.

        Clicks whose propagation was stopped by an action control are
        ignored.
        """
        if event is not None and event.propagation_stopped:
            return False
        self.toggle()
        return True


def build_state_link(dashboard_url: str, testcase: str) -> str:
    """Return a stable link that opens the dashboard focused on *testcase*."""
    separator = "&" if "?" in dashboard_url else "?"
    return f"{dashboard_url}{separator}focus=tc:{quote(testcase, safe='')}"


def seed_expanded_id(focus: str | None, states: Iterable[GatingState]) -> str:
    """Resolve a deep-link focus value into an initial expanded id.

    Accepts ``tc:<test-case-name>``, ``id:<result-id>``, or a query string
    containing ``focus=...``.  Returns "" when nothing matches.
    """
    if not focus:
        return ""
    if focus.startswith("?") or focus.startswith("focus="):
        values = parse_qs(focus.lstrip("?")).get("focus", [])
        if not values:
            return ""
        focus = values[0]

    kind, _, target = focus.partition(":")
    if not target:
        return ""
    states = list(states)
    if kind == "tc":
        for state in states:
            if state.testcase == target:
                return state.testcase
    elif kind == "id":
        for state in states:
            result_id = state.get("result.id")
            if isinstance(result_id, (str, int)) and str(result_id) == target:
                return state.testcase
    return ""
