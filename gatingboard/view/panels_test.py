"""Tests for detail panel composition."""

from __future__ import annotations

from gatingboard.gating.state import GatingState
from gatingboard.view.panels import (
    Segment,
    compose_details,
    linkify,
    requirement_panel,
    result_data_panel,
    result_info_panel,
    waiver_panel,
)


class TestLinkify:
    """Tests for linkify."""

    def test_plain_text(self):
        """Text without URLs is a single plain segment."""
        assert linkify("hello") == [Segment("hello")]

    def test_url_only(self):
        """A URL-shaped value becomes one link."""
        assert linkify("http://ci/job/1") == [Segment("http://ci/job/1", href="http://ci/job/1")]

    def test_mixed(self):
        """Text around a URL is kept; trailing punctuation stays outside."""
        assert linkify("see https://x/y. ok") == [
            Segment("see "),
            Segment("https://x/y", href="https://x/y"),
            Segment(". ok"),
        ]

    def test_bare_www_host(self):
        """A bare www. host links to its http address."""
        assert linkify("docs at www.example.com/gating, ok") == [
            Segment("docs at "),
            Segment("www.example.com/gating", href="http://www.example.com/gating"),
            Segment(", ok"),
        ]

    def test_scheme_url_with_www_host(self):
        """A full URL with a www host keeps its own scheme."""
        url = "https://www.example.com/x"
        assert linkify(url) == [Segment(url, href=url)]

    def test_empty(self):
        """Empty text yields one empty segment."""
        assert linkify("") == [Segment("")]


class TestResultInfoPanel:
    """Tests for result_info_panel."""

    def test_no_result(self):
        """No result record: no panel."""
        assert result_info_panel(GatingState("t")) is None

    def test_result_without_mapped_fields(self):
        """A result lacking every mapped field: no panel."""
        assert result_info_panel(GatingState("t", result={"data": {}})) is None

    def test_pairs(self):
        """Mapped fields are shown in table order."""
        panel = result_info_panel(GatingState("t", result={"outcome": "PASSED", "id": 3}))
        assert panel is not None
        assert panel.caption == "Result info"
        assert panel.pairs == (("result id", "3"), ("outcome", "PASSED"))

    def test_raw_timestamps(self):
        """human_timestamps=False shows the raw value."""
        state = GatingState("t", result={"submit_time": "2021-03-04T10:20:30"})
        panel = result_info_panel(state, human_timestamps=False)
        assert panel.pairs == (("submited", "2021-03-04T10:20:30"),)


class TestWaiverAndRequirementPanels:
    """Tests for the panels sharing the waiver table."""

    def test_no_waiver(self):
        """No waiver: no panel."""
        assert waiver_panel(GatingState("t")) is None

    def test_waiver_pairs(self):
        """Waiver fields are shown."""
        panel = waiver_panel(GatingState("t", waiver={"id": 5, "username": "u"}))
        assert panel.caption == "Waiver info"
        assert panel.pairs == (("id", "5"), ("username", "u"))

    def test_requirement_uses_waiver_table(self):
        """The requirement record is read with the same table."""
        state = GatingState(
            "t",
            requirement={"testcase": "t", "type": "test-result-missing", "scenario": "s1"},
        )
        panel = requirement_panel(state)
        assert panel.caption == "Requirement info"
        assert panel.pairs == (("scenario", "s1"),)

    def test_requirement_without_labeled_fields(self):
        """A requirement with only type/testcase: no panel."""
        state = GatingState("t", requirement={"testcase": "t", "type": "x"})
        assert requirement_panel(state) is None


class TestResultDataPanel:
    """Tests for result_data_panel."""

    def test_absent_data(self):
        """No result or no data: no panel."""
        assert result_data_panel(GatingState("t")) is None
        assert result_data_panel(GatingState("t", result={"outcome": "PASSED"})) is None

    def test_empty_or_malformed_data(self):
        """Empty or non-mapping data: no panel."""
        assert result_data_panel(GatingState("t", result={"data": {}})) is None
        assert result_data_panel(GatingState("t", result={"data": ["x"]})) is None

    def test_items_with_links(self):
        """Each key becomes an item; URL values become links."""
        state = GatingState(
            "t",
            result={"data": {"item": ["pkg-1.0"], "log": ["http://ci/log"]}},
        )
        panel = result_data_panel(state)
        assert [i.name for i in panel.items] == ["item", "log"]
        assert panel.items[0].values == ((Segment("pkg-1.0"),),)
        assert panel.items[1].values == ((Segment("http://ci/log", href="http://ci/log"),),)

    def test_scalar_value(self):
        """A scalar value is shown as a single value."""
        panel = result_data_panel(GatingState("t", result={"data": {"arch": "x86_64"}}))
        assert panel.items[0].values == ((Segment("x86_64"),),)

    def test_linkify_disabled(self):
        """linkify_values=False keeps URLs as text."""
        state = GatingState("t", result={"data": {"log": ["http://ci/log"]}})
        panel = result_data_panel(state, linkify_values=False)
        assert panel.items[0].values == ((Segment("http://ci/log"),),)


class TestComposeDetails:
    """Tests for compose_details."""

    def test_order_and_suppression(self):
        """Panels appear in fixed order and empty ones are dropped."""
        state = GatingState(
            "t",
            result={"outcome": "FAILED", "data": {"rebuild": ["http://ci/retry"]}},
            waiver={"id": 5},
            requirement={"testcase": "t", "comment": "needed"},
        )
        captions = [p.caption for p in compose_details(state)]
        assert captions == ["Result info", "Waiver info", "Result data", "Requirement info"]

    def test_nothing_to_show(self):
        """A bare state has no detail panels."""
        assert compose_details(GatingState("t")) == []
