"""Commands emitted by row actions, and the action controls emitting them.

Actions do not perform side effects themselves.  They build a command
value and hand it to an ``emit`` callable owned by the surrounding
application, which is free to queue, send or drop it.  Nothing here waits
for the outcome.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Union

from gatingboard.gating.aggregator import available_actions
from gatingboard.gating.state import GatingState


RERUN_TITLE = "Rerun testing. Note login to the linked system might be required."


@dataclass(frozen=True)
class RequestWaiver:
    """Ask the waiver service to waive *state* on *artifact*."""

    artifact: dict[str, Any]
    state: GatingState

    def to_dict(self) -> dict[str, Any]:
        return {
            "command": "request_waiver",
            "artifact": self.artifact,
            "state": self.state.as_dict(),
        }


@dataclass(frozen=True)
class OpenExternal:
    """Open *url* in a new, isolated navigation context."""

    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"command": "open_external", "url": self.url}


Command = Union[RequestWaiver, OpenExternal]
Emit = Callable[[Command], None]


@dataclass
class CommandLog:
    """Emit sink that records every command it receives."""

    commands: list[Command] = field(default_factory=list)

    def __call__(self, command: Command) -> None:
        self.commands.append(command)


@dataclass
class ClickEvent:
    """A click inside a row.

    Action controls call ``stop_propagation`` so the enclosing row does
    not also treat the click as an expand/collapse toggle.
    """

    propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class WaiveAction:
    """The ``waive`` button of a gating row."""

    label = "waive"

    def __init__(
        self, artifact: dict[str, Any], state: GatingState, emit: Emit
    ) -> None:
        self.artifact = artifact
        self.state = state
        self._emit = emit

    @property
    def enabled(self) -> bool:
        return available_actions(self.state).can_waive

    def activate(self, event: ClickEvent | None = None) -> RequestWaiver | None:
        """Emit a RequestWaiver command; inert when waiving is unavailable."""
        if event is not None:
            event.stop_propagation()
        if not self.enabled:
            return None
        command = RequestWaiver(artifact=self.artifact, state=self.state)
        self._emit(command)
        return command


class RerunAction:
    """The ``rerun`` link of a gating row."""

    label = "rerun"
    title = RERUN_TITLE

    def __init__(self, state: GatingState, emit: Emit) -> None:
        self.state = state
        self._emit = emit

    @property
    def url(self) -> str | None:
        return available_actions(self.state).rerun_url

    @property
    def enabled(self) -> bool:
        return self.url is not None

    def activate(self, event: ClickEvent | None = None) -> OpenExternal | None:
        """Emit an OpenExternal command for the rebuild link."""
        if event is not None:
            event.stop_propagation()
        url = self.url
        if url is None:
            return None
        command = OpenExternal(url=url)
        self._emit(command)
        return command
