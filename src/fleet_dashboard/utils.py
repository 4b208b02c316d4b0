"""Shared utility functions for the fleet dashboard."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone

_FRACTION_RE = re.compile(r"(?<=:\d\d)\.(\d+)")


def _six_digit_fraction(match: re.Match) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def get_initials(name: str | None) -> str:
    """Avatar initials: first letter of the first and last name.

    Returns "?" for a missing name.
    """
    tokens = name.split() if name else []
    if not tokens:
        return "?"
    if len(tokens) == 1:
        return tokens[0][0].upper()
    return (tokens[0][0] + tokens[-1][0]).upper()


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO date/datetime string into an aware UTC datetime.

    Naive values are taken as UTC. Returns None for anything unparseable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value:
        # PostgREST trims trailing zeros; fromisoformat on 3.10 wants 3 or 6 digits
        text = _FRACTION_RE.sub(_six_digit_fraction, value.replace("Z", "+00:00"))
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def format_time_ago(moment: datetime | str, now: datetime | None = None) -> str:
    """Human-readable age of an activity, e.g. "5 minutes ago"."""
    when = parse_timestamp(moment)
    if when is None:
        return ""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = int((now - when).total_seconds())
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return _plural(seconds // 60, "minute")
    if seconds < 86400:
        return _plural(seconds // 3600, "hour")
    return _plural(seconds // 86400, "day")
