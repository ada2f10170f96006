"""Unit tests for the config module."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

from gatingboard.config import DashboardConfig


class TestDashboardConfigLoad:
    """Tests for DashboardConfig.load."""

    def test_no_path_uses_defaults(self):
        """No path gives default settings."""
        cfg = DashboardConfig.load(None)
        assert cfg.dashboard_url is None
        assert cfg.human_timestamps is True
        assert cfg.linkify_values is True
        assert cfg.report_title == "Gating Status"

    def test_nonexistent_path_uses_defaults(self):
        """A missing file gives default settings."""
        with tempfile.TemporaryDirectory() as tmpdir:
            assert DashboardConfig.load(Path(tmpdir) / "missing.json") == DashboardConfig()

    def test_load_from_file(self):
        """Keys present in the file override defaults; the rest are kept."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "dashboard.json"
            path.write_text(json.dumps({
                "dashboard_url": "https://dash",
                "human_timestamps": False,
                "unrelated": 1,
            }))
            cfg = DashboardConfig.load(path)
        assert cfg.dashboard_url == "https://dash"
        assert cfg.human_timestamps is False
        assert cfg.linkify_values is True

    def test_empty_url_disables_links(self):
        """An empty dashboard URL is treated as unset."""
        assert DashboardConfig.from_dict({"dashboard_url": ""}).dashboard_url is None

    def test_corrupted_file_uses_defaults(self, capsys):
        """Corrupted JSON falls back to defaults with a warning."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "dashboard.json"
            path.write_text("{ invalid json }")
            assert DashboardConfig.load(path) == DashboardConfig()
        assert "config: ignoring unreadable" in capsys.readouterr().err

    def test_non_object_file_uses_defaults(self, capsys):
        """A JSON list is ignored with a warning."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "dashboard.json"
            path.write_text("[1, 2]")
            assert DashboardConfig.load(path) == DashboardConfig()
        assert "expected a JSON object" in capsys.readouterr().err


class TestDashboardConfigOverrides:
    """Tests for with_overrides."""

    def test_none_keeps_value(self):
        """None leaves a setting untouched."""
        cfg = DashboardConfig(dashboard_url="https://dash")
        assert cfg.with_overrides() == cfg

    def test_values_replaced(self):
        """Given values replace the stored ones without mutating the original."""
        cfg = DashboardConfig()
        new = cfg.with_overrides(dashboard_url="https://dash", report_title="Gate")
        assert new.dashboard_url == "https://dash"
        assert new.report_title == "Gate"
        assert cfg.dashboard_url is None


class TestDashboardConfigSave:
    """Tests for saving DashboardConfig."""

    def test_save_roundtrip(self):
        """Saved settings load back."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "sub" / "dashboard.json"
            cfg = DashboardConfig(dashboard_url="https://dash", report_title="Gate")
            cfg.save(path)
            assert DashboardConfig.load(path) == cfg
