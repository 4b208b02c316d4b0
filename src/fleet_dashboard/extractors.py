"""Display-only fields derived from free-text notes and opaque identifiers.

Every function here is total: malformed input degrades to an empty or
default value instead of raising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_FLIGHT_NUMBER_RE = re.compile(r"Flight:?\s*([A-Z0-9]{2,}\s*[0-9]{1,4}[A-Z]?)", re.IGNORECASE)
_AIRLINE_RE = re.compile(r"Airline:?\s*([^,\n]+)", re.IGNORECASE)
_TERMINAL_RE = re.compile(r"Terminal:?\s*([^,\n]+)", re.IGNORECASE)

# Line-oriented labels written by the booking form
_FLIGHT_LINE_RE = re.compile(r"Flight: ([^\n]+)")
_AIRLINE_LINE_RE = re.compile(r"Airline: ([^\n]+)")
_TERMINAL_LINE_RE = re.compile(r"Terminal: ([^\n]+)")

_PASSENGER_BULLETS_RE = re.compile(r"Passengers:\s*\n((?:- [^\n]+\n?)+)", re.IGNORECASE)
_PASSENGER_LINES_RE = re.compile(r"Passengers:\s*\n((?:[^\n-][^\n]*\n?)+)", re.IGNORECASE)

_STATUS_PREFIX_RE = re.compile(r"STATUS:([a-z_]+)", re.IGNORECASE)

_HEX_PREFIX_RE = re.compile(r"[0-9a-fA-F]*")


@dataclass(frozen=True)
class FlightDetails:
    flight: str | None = None
    airline: str | None = None
    terminal: str | None = None


def extract_flight_info(notes: str | None) -> str:
    """Summarize flight number, airline and terminal found in trip notes.

    Output order is always flight, airline, terminal regardless of where the
    labels appear, e.g. ``"BA 249, British Airways, 5"``.
    """
    if not notes:
        return ""

    parts = []
    for pattern in (_FLIGHT_NUMBER_RE, _AIRLINE_RE, _TERMINAL_RE):
        match = pattern.search(notes)
        if match:
            parts.append(match.group(1).strip())
    return ", ".join(parts)


def parse_flight_details(notes: str | None) -> FlightDetails:
    """Read the ``Flight: / Airline: / Terminal:`` lines of a booking note."""
    if not notes:
        return FlightDetails()

    def _line(pattern: re.Pattern) -> str | None:
        match = pattern.search(notes)
        return match.group(1).strip() if match else None

    return FlightDetails(
        flight=_line(_FLIGHT_LINE_RE),
        airline=_line(_AIRLINE_LINE_RE),
        terminal=_line(_TERMINAL_LINE_RE),
    )


def parse_passengers(notes: str | None) -> list[str]:
    """Passenger names listed under a ``Passengers:`` header.

    Accepts ``- name`` bullet lines, falling back to plain lines.
    """
    if not notes:
        return []

    match = _PASSENGER_BULLETS_RE.search(notes)
    if match:
        names = [re.sub(r"^- ", "", line).strip() for line in match.group(1).split("\n")]
        return [name for name in names if name]

    match = _PASSENGER_LINES_RE.search(notes)
    if match:
        names = [line.strip() for line in match.group(1).split("\n")]
        return [name for name in names if name]
    return []


def extract_trip_status(notes: str | None) -> str:
    """Legacy status stored as a leading ``STATUS:xxx`` marker in notes."""
    if not notes:
        return "scheduled"
    match = _STATUS_PREFIX_RE.match(notes)
    return match.group(1).lower() if match else "scheduled"


def format_service_type(value: str) -> str:
    """``airport_pickup`` -> ``Airport Pickup``."""
    words = value.replace("_", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def format_vehicle_id(uuid: str) -> str:
    """Short display code for a vehicle id, e.g. ``V291``.

    Collisions between ids are expected; never use this as a key.
    """
    digits = _HEX_PREFIX_RE.match(uuid[:3] if uuid else "").group(0)
    number = int(digits, 16) % 1000 if digits else 0
    return f"V{number:03d}"
