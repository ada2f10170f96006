"""Human-readable rendering of record timestamps."""

from __future__ import annotations

import datetime
from typing import Any


def _parse_timestamp(value: Any) -> datetime.datetime | None:
    """Parse a timestamp value into an aware datetime.

    Accepts datetime/date objects (YAML loads unquoted timestamps as
    these), ISO-8601 strings and epoch seconds.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, datetime.date):
        parsed = datetime.datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        try:
            return datetime.datetime.fromtimestamp(value, tz=datetime.timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def timestamp_for_user(value: Any, cut: bool = False) -> str:
    """Format a timestamp for display.

    Naive timestamps are taken to be UTC.  Values that do not parse, or
    fall outside the representable range once shifted to UTC, are
    returned unchanged (as text) so a bad upstream field never hides the
    rest of a panel.

    Args:
        value: ISO-8601 string (``2021-03-04T10:20:30.123``), datetime,
            date, or epoch seconds.
        cut: Drop the weekday and zone, e.g. ``Mar 04 2021 10:20:30``.

    Returns:
        Display string.
    """
    parsed = _parse_timestamp(value)
    if parsed is None:
        return str(value)
    try:
        parsed = parsed.astimezone(datetime.timezone.utc)
        if cut:
            return parsed.strftime("%b %d %Y %H:%M:%S")
        return parsed.strftime("%a %b %d %Y %H:%M:%S UTC")
    except (OverflowError, ValueError):
        return str(value)
