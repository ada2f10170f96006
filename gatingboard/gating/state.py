"""Merged per-test gating record.

A GatingState joins the three upstream records for one test case: the
result, an optional waiver, and an optional gating requirement.  Records
are kept as the plain dicts the upstream services return; the state is
read-only for the duration of a render.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from gatingboard.extraction.field_mapping import resolve_path


def _as_record(value: Any) -> dict[str, Any] | None:
    """Return *value* as a dict record, or None if it is not a mapping."""
    if isinstance(value, Mapping):
        return dict(value)
    return None


@dataclass(frozen=True)
class GatingState:
    """Gating state of one test case within an artifact.

    Attributes:
        testcase: Test case name, the identity key of the row.
        result: Result record (id, submit_time, outcome, note, href,
            data, testcase) or None when no result has been reported.
        waiver: Waiver record or None.
        requirement: Gating requirement record or None.
    """

    testcase: str
    result: dict[str, Any] | None = None
    waiver: dict[str, Any] | None = None
    requirement: dict[str, Any] | None = None

    def get(self, path: str) -> Any:
        """Resolve a dot-path against the state, ``ABSENT`` if missing."""
        return resolve_path(self.as_dict(), path)

    def as_dict(self) -> dict[str, Any]:
        """Return the state as a plain dict, omitting missing records."""
        data: dict[str, Any] = {"testcase": self.testcase}
        if self.result is not None:
            data["result"] = self.result
        if self.waiver is not None:
            data["waiver"] = self.waiver
        if self.requirement is not None:
            data["requirement"] = self.requirement
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GatingState:
        """Build a state from an upstream payload.

        The name is taken from ``testcase``, then ``requirement.testcase``,
        then ``result.testcase.name``.  Records that are not mappings are
        dropped.

        Raises:
            ValueError: If no test case name can be resolved.
        """
        result = _as_record(data.get("result"))
        waiver = _as_record(data.get("waiver"))
        requirement = _as_record(data.get("requirement"))

        name: Any = data.get("testcase")
        if not isinstance(name, str) or not name:
            name = resolve_path(requirement, "testcase")
        if not isinstance(name, str) or not name:
            name = resolve_path(result, "testcase.name")
        if not isinstance(name, str) or not name:
            raise ValueError("gating state has no testcase name")

        return cls(
            testcase=name,
            result=result,
            waiver=waiver,
            requirement=requirement,
        )
