"""Badge and action derivation for a merged gating state.

Everything here is a pure function of a GatingState.  Missing or
malformed records never raise; they simply switch the corresponding
badge or action off.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from gatingboard.extraction.field_mapping import ABSENT
from gatingboard.gating.state import GatingState


GATING_LABEL = "required for gating"
WAIVED_LABEL = "waived"
UNKNOWN_ICON = "unknown"

# Icon key (result outcome or greenwave requirement type) -> display category
ICON_CATEGORIES: dict[str, str] = {
    # Result outcomes
    "passed": "passed",
    "failed": "failed",
    "error": "error",
    "info": "info",
    "needs_inspection": "info",
    "queued": "pending",
    "running": "pending",
    # Requirement types
    "test-result-passed": "passed",
    "test-result-failed": "failed",
    "test-result-errored": "error",
    "test-result-missing": "missing",
    "test-result-failed-waived": "passed",
    "test-result-missing-waived": "passed",
    "fetched-gating-yaml": "passed",
    "missing-gating-yaml": "missing",
    "invalid-gating-yaml": "error",
    "failed-fetch-gating-yaml": "error",
    "excluded": "info",
    "blacklisted": "info",
    UNKNOWN_ICON: "unknown",
}


@dataclass(frozen=True)
class Badges:
    """Derived gating flags for one test case."""

    is_waived: bool
    is_gating_result: bool
    icon_key: str

    @property
    def labels(self) -> list[str]:
        """Badge labels in display order (gating before waived)."""
        labels: list[str] = []
        if self.is_gating_result:
            labels.append(GATING_LABEL)
        if self.is_waived:
            labels.append(WAIVED_LABEL)
        return labels

    @property
    def icon_category(self) -> str:
        """Display category for the status glyph."""
        return ICON_CATEGORIES.get(self.icon_key, "unknown")


@dataclass(frozen=True)
class Actions:
    """Which action controls a row offers."""

    can_waive: bool
    can_rerun: bool
    rerun_url: str | None = None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def is_gating_result(state: GatingState) -> bool:
    """Return True if the requirement names a test case."""
    return _is_non_empty_string(state.get("requirement.testcase"))


def is_waived(state: GatingState) -> bool:
    """Return True if the waiver carries a numeric id.

    A string id such as ``"5"`` does not count; upstream waiverdb always
    sends integers.
    """
    return _is_number(state.get("waiver.id"))


def icon_key(state: GatingState) -> str:
    """Lowercased requirement type, else result outcome, else ``unknown``.

    An empty string is present and wins; only absent or non-string values
    fall through.
    """
    for path in ("requirement.type", "result.outcome"):
        value = state.get(path)
        if isinstance(value, str):
            return value.lower()
    return UNKNOWN_ICON


def rerun_url(state: GatingState) -> str | None:
    """Return the first ``result.data.rebuild`` entry if it is a usable URL."""
    rebuild = state.get("result.data.rebuild")
    if rebuild is ABSENT or isinstance(rebuild, (str, bytes)):
        return None
    if not isinstance(rebuild, Sequence) or len(rebuild) == 0:
        return None
    first = rebuild[0]
    if not _is_non_empty_string(first):
        return None
    return first


def derive_badges(state: GatingState) -> Badges:
    """Compute the badge flags and icon key for *state*."""
    return Badges(
        is_waived=is_waived(state),
        is_gating_result=is_gating_result(state),
        icon_key=icon_key(state),
    )


def available_actions(state: GatingState) -> Actions:
    """Compute which actions are offered for *state*.

    Waiving needs a requirement with a test case identity; a bare result
    cannot be waived from here.  Rerun needs a rebuild link in the
    result payload.
    """
    url = rerun_url(state)
    return Actions(
        can_waive=is_gating_result(state),
        can_rerun=url is not None,
        rerun_url=url,
    )
