"""Loading of merged gating states from a YAML or JSON file.

Expected layout::

    artifact:
      type: brew-build
      aid: "12345"
    states:
      - testcase: osci.brew-build.tier0.functional
        result: {...}
        waiver: {...}
        requirement: {...}

A bare list of states is accepted too (the artifact is then empty).
Entries that cannot be turned into a state are skipped with a warning so
one bad test case does not hide its siblings.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from gatingboard.gating.state import GatingState


def parse_states(payload: Any) -> tuple[dict[str, Any], list[GatingState]]:
    """Split a loaded payload into ``(artifact, states)``.

    Raises:
        ValueError: If the payload is neither a mapping nor a list.
    """
    if isinstance(payload, Mapping):
        artifact = payload.get("artifact") or {}
        raw_states = payload.get("states") or []
    elif isinstance(payload, list):
        artifact = {}
        raw_states = payload
    else:
        raise ValueError("states file must contain a mapping or a list")

    if not isinstance(artifact, Mapping):
        print("loader: artifact is not a mapping, ignoring it", file=sys.stderr)
        artifact = {}
    if not isinstance(raw_states, list):
        raise ValueError("'states' must be a list")

    states: list[GatingState] = []
    for index, raw in enumerate(raw_states):
        if not isinstance(raw, Mapping):
            print(f"loader: skipping state #{index}: not a mapping", file=sys.stderr)
            continue
        try:
            states.append(GatingState.from_dict(raw))
        except ValueError as exc:
            print(f"loader: skipping state #{index}: {exc}", file=sys.stderr)
    return dict(artifact), states


def load_states(path: Path) -> tuple[dict[str, Any], list[GatingState]]:
    """Read and parse a states file.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML/JSON.
        ValueError: If the document has the wrong shape.
    """
    with open(path) as f:
        payload = yaml.safe_load(f)
    return parse_states(payload)
