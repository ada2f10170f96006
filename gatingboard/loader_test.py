"""Tests for loading gating states from files."""

from __future__ import annotations

import datetime
import json
import tempfile
from pathlib import Path

import pytest
import yaml

from gatingboard.extraction.field_mapping import human_timestamp
from gatingboard.loader import load_states, parse_states


class TestParseStates:
    """Tests for parse_states."""

    def test_mapping_payload(self):
        """Artifact and states are split out."""
        artifact, states = parse_states({
            "artifact": {"type": "brew-build", "aid": "1"},
            "states": [{"testcase": "t1"}, {"testcase": "t2"}],
        })
        assert artifact == {"type": "brew-build", "aid": "1"}
        assert [s.testcase for s in states] == ["t1", "t2"]

    def test_list_payload(self):
        """A bare list is a list of states with no artifact."""
        artifact, states = parse_states([{"testcase": "t1"}])
        assert artifact == {}
        assert len(states) == 1

    def test_bad_entries_skipped(self, capsys):
        """Unusable entries are skipped and siblings survive."""
        _, states = parse_states([
            {"testcase": "good"},
            "not a mapping",
            {"result": {"outcome": "PASSED"}},
        ])
        assert [s.testcase for s in states] == ["good"]
        err = capsys.readouterr().err
        assert "skipping state #1" in err
        assert "skipping state #2" in err

    def test_wrong_shape_raises(self):
        """A scalar document is rejected."""
        with pytest.raises(ValueError):
            parse_states("hello")

    def test_states_not_list_raises(self):
        """'states' must be a list."""
        with pytest.raises(ValueError):
            parse_states({"states": {"testcase": "t"}})

    def test_empty_document(self):
        """An empty mapping gives no states."""
        assert parse_states({}) == ({}, [])


class TestLoadStates:
    """Tests for load_states."""

    def test_yaml_file(self):
        """YAML files load."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "states.yaml"
            path.write_text(yaml.dump({"states": [{"testcase": "t1"}]}))
            _, states = load_states(path)
            assert states[0].testcase == "t1"

    def test_json_file(self):
        """JSON files load through the YAML parser."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "states.json"
            path.write_text(json.dumps([{"testcase": "t1", "waiver": {"id": 2}}]))
            _, states = load_states(path)
            assert states[0].waiver == {"id": 2}

    def test_unquoted_timestamps(self):
        """Unquoted YAML timestamps load as datetimes and still render."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "states.yaml"
            path.write_text(
                "states:\n"
                "  - testcase: t1\n"
                "    result: {outcome: PASSED, submit_time: 2024-05-14T09:12:44}\n"
            )
            _, states = load_states(path)
        submitted = states[0].get("result.submit_time")
        assert isinstance(submitted, datetime.datetime)
        assert human_timestamp(submitted) == "May 14 2024 09:12:44"

    def test_missing_file(self):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_states(Path("/nonexistent/states.yaml"))
