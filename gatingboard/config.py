"""Dashboard display settings.

Settings live in a small JSON file so a team can pin the dashboard base
URL (used for stable per-test links) and the rendering switches once
instead of passing them on every run.  Unknown keys are ignored and keys
missing from the file keep their defaults.
"""

from __future__ import annotations

import dataclasses
import json
import sys
from pathlib import Path
from typing import Any


@dataclasses.dataclass(frozen=True)
class DashboardConfig:
    """Display settings for the gating view.

    Attributes:
        dashboard_url: Base URL for per-test state links; None disables them.
        human_timestamps: Render timestamp fields in human-readable form.
        linkify_values: Render URL-shaped result data values as links.
        report_title: Title of the HTML page.
    """

    dashboard_url: str | None = None
    human_timestamps: bool = True
    linkify_values: bool = True
    report_title: str = "Gating Status"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DashboardConfig:
        """Build settings from a decoded JSON object, coercing each value."""
        defaults = cls()
        url = data.get("dashboard_url", defaults.dashboard_url)
        return cls(
            dashboard_url=str(url) if url else None,
            human_timestamps=bool(data.get("human_timestamps", defaults.human_timestamps)),
            linkify_values=bool(data.get("linkify_values", defaults.linkify_values)),
            report_title=str(data.get("report_title", defaults.report_title)),
        )

    @classmethod
    def load(cls, path: Path | None) -> DashboardConfig:
        """Load settings from ``path``.

        A missing path or file gives the defaults.  A file that cannot be
        read or does not hold a JSON object is reported on stderr and
        ignored.
        """
        if path is None or not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
        except (json.JSONDecodeError, OSError) as exc:
            print(f"config: ignoring unreadable {path}: {exc}", file=sys.stderr)
            return cls()
        if not isinstance(data, dict):
            print(f"config: ignoring {path}: expected a JSON object", file=sys.stderr)
            return cls()
        return cls.from_dict(data)

    def with_overrides(
        self,
        dashboard_url: str | None = None,
        report_title: str | None = None,
    ) -> DashboardConfig:
        """Return a copy with the given non-None values replaced."""
        changes: dict[str, Any] = {}
        if dashboard_url is not None:
            changes["dashboard_url"] = dashboard_url or None
        if report_title is not None:
            changes["report_title"] = report_title
        return dataclasses.replace(self, **changes)

    def save(self, path: Path) -> None:
        """Write the settings to ``path`` as JSON, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(dataclasses.asdict(self), f, indent=2)
            f.write("\n")
