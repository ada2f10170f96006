"""Gating state: merged records, derived badges, and row actions."""

from gatingboard.gating.aggregator import (
    ICON_CATEGORIES,
    Actions,
    Badges,
    available_actions,
    derive_badges,
)
from gatingboard.gating.commands import (
    ClickEvent,
    CommandLog,
    OpenExternal,
    RequestWaiver,
    RerunAction,
    WaiveAction,
)
from gatingboard.gating.state import GatingState

__all__ = [
    "Actions",
    "Badges",
    "ClickEvent",
    "CommandLog",
    "GatingState",
    "ICON_CATEGORIES",
    "OpenExternal",
    "RequestWaiver",
    "RerunAction",
    "WaiveAction",
    "available_actions",
    "derive_badges",
]
