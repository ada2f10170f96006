"""Summary report generation for an artifact's gating states.

Collects GatingState records and produces a structured report holding
per-test derived flags (badges, icon, available actions) and summary
counts, written as YAML or JSON.
"""

from __future__ import annotations

import datetime
import json
from pathlib import Path
from typing import Any

import yaml

from gatingboard.gating.aggregator import available_actions, derive_badges
from gatingboard.gating.state import GatingState
from gatingboard.view.expansion import build_state_link


class GatingReporter:
    """Collects gating states and generates summary reports."""

    def __init__(self, artifact: dict[str, Any] | None = None) -> None:
        self.artifact: dict[str, Any] = dict(artifact or {})
        self.states: list[GatingState] = []
        self.dashboard_url: str | None = None

    def set_dashboard_url(self, url: str | None) -> None:
        """Set the base dashboard URL used for per-test links.

        Args:
            url: Dashboard URL, or None to omit links.
        """
        self.dashboard_url = url

    def add_state(self, state: GatingState) -> None:
        """Add one gating state to the report."""
        self.states.append(state)

    def add_states(self, states: list[GatingState]) -> None:
        """Add multiple gating states to the report."""
        self.states.extend(states)

    def generate_report(self) -> dict[str, Any]:
        """Generate the report data structure.

        Returns:
            Dictionary ``{"report": {...}}`` suitable for YAML/JSON
            serialization.
        """
        now = datetime.datetime.now(tz=datetime.timezone.utc).isoformat()
        report: dict[str, Any] = {
            "generated_at": now,
            "summary": self._compute_summary(),
            "tests": [self._format_state(s) for s in self.states],
        }
        if self.artifact:
            report["artifact"] = self.artifact
        return {"report": report}

    def write_yaml(self, path: Path) -> None:
        """Write the report as YAML, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(
                self.generate_report(),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

    def write_json(self, path: Path) -> None:
        """Write the report as indented JSON, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.generate_report(), f, indent=2, default=str)
            f.write("\n")

    def _format_state(self, state: GatingState) -> dict[str, Any]:
        badges = derive_badges(state)
        actions = available_actions(state)
        entry: dict[str, Any] = {
            "testcase": state.testcase,
            "icon": badges.icon_key,
            "category": badges.icon_category,
            "labels": badges.labels,
            "can_waive": actions.can_waive,
            "can_rerun": actions.can_rerun,
        }
        if actions.rerun_url is not None:
            entry["rerun_url"] = actions.rerun_url
        if self.dashboard_url:
            entry["link"] = build_state_link(self.dashboard_url, state.testcase)
        return entry

    def _compute_summary(self) -> dict[str, Any]:
        categories: dict[str, int] = {}
        gating = waived = rerunnable = 0
        for state in self.states:
            badges = derive_badges(state)
            if badges.is_gating_result:
                gating += 1
            if badges.is_waived:
                waived += 1
            if available_actions(state).can_rerun:
                rerunnable += 1
            category = badges.icon_category
            categories[category] = categories.get(category, 0) + 1
        return {
            "total": len(self.states),
            "required_for_gating": gating,
            "waived": waived,
            "rerunnable": rerunnable,
            "categories": dict(sorted(categories.items())),
        }
