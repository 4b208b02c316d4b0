"""Filter and sort state for the list views.

Each view-model owns a little UI-local state and derives its output on every
read, so the result always reflects the latest inputs.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import datetime, timezone

from fleet_dashboard.models import DateRange, SortConfig, SparePart, Trip
from fleet_dashboard.utils import parse_timestamp

# ── Trips ────────────────────────────────────────────────────────────────


def _trip_matches_search(trip: Trip, search_term: str) -> bool:
    if search_term == "":
        return True
    needle = search_term.lower()
    return (
        needle in (trip.client_name or "").lower()
        or needle in (trip.driver_name or "").lower()
        or needle in (trip.vehicle_details or "").lower()
        or search_term.upper() in (trip.id or "")[:8].upper()
    )


def filter_trips(
    trips: Iterable[Trip] | None,
    search_term: str = "",
    status_filter: str = "all",
) -> list[Trip]:
    """Trips matching both the free-text search and the status filter."""
    if not trips:
        return []
    return [
        trip
        for trip in trips
        if _trip_matches_search(trip, search_term)
        and (status_filter == "all" or trip.status == status_filter)
    ]


class TripFilter:
    """Search box + status dropdown over the trips table."""

    def __init__(self, trips: Iterable[Trip] | None = None) -> None:
        self.trips: list[Trip] = list(trips or [])
        self.search_term = ""
        self.status_filter = "all"

    def set_search_term(self, value: str) -> None:
        self.search_term = value

    def set_status_filter(self, value: str) -> None:
        self.status_filter = value

    @property
    def filtered_trips(self) -> list[Trip]:
        return filter_trips(self.trips, self.search_term, self.status_filter)


# ── Spare parts ──────────────────────────────────────────────────────────


class PartsSorting:
    """Column header sort state for the parts table.

    Only produces a SortConfig; the store query applies it.
    """

    def __init__(self) -> None:
        self.sort_config = SortConfig()

    def handle_sort(self, column: str) -> SortConfig:
        current = self.sort_config
        if current.column == column and current.direction == "asc":
            direction = "desc"
        else:
            direction = "asc"
        self.sort_config = SortConfig(column=column, direction=direction)
        return self.sort_config


class PartsFilter:
    """Search plus stock-level tabs over the parts inventory."""

    _SEARCH_FIELDS = ("name", "part_number", "category", "manufacturer", "location")

    def __init__(self, parts: Iterable[SparePart] | None = None) -> None:
        self.parts: list[SparePart] = list(parts or [])
        self.search_query = ""

    def set_search_query(self, value: str) -> None:
        self.search_query = value

    @property
    def filtered_parts(self) -> list[SparePart]:
        needle = self.search_query.lower()
        return [
            part
            for part in self.parts
            if any(needle in (getattr(part, f) or "").lower() for f in self._SEARCH_FIELDS)
        ]

    def _with_status(self, status: str) -> list[SparePart]:
        return [p for p in self.filtered_parts if p.status == status]

    @property
    def in_stock_parts(self) -> list[SparePart]:
        return self._with_status("in_stock")

    @property
    def low_stock_parts(self) -> list[SparePart]:
        return self._with_status("low_stock")

    @property
    def out_of_stock_parts(self) -> list[SparePart]:
        return self._with_status("out_of_stock")


# ── Reports ──────────────────────────────────────────────────────────────

_TIME_RANGE_MONTHS = {"month": 1, "quarter": 3, "year": 12}


class ReportFilters:
    """Tab, preset time range and custom date range of the reports page."""

    def __init__(self) -> None:
        self.active_tab = "vehicles"
        self.time_range = "month"
        self.date_range: DateRange | None = None

    def set_active_tab(self, tab: str) -> None:
        self.active_tab = tab

    def set_time_range(self, time_range: str) -> None:
        self.time_range = time_range

    def set_date_range(self, date_range: DateRange | None) -> None:
        self.date_range = date_range

    def handle_date_range_change(self, date_range: DateRange | None) -> None:
        """Picking a range with a start date switches to the custom preset."""
        self.date_range = date_range
        if date_range is not None and date_range.from_date:
            self.time_range = "custom"

    def clear_date_range(self) -> None:
        self.date_range = None
        self.time_range = "month"

    def apply(self, rows: Iterable[dict] | None, now: datetime | None = None) -> list[dict]:
        return filter_data_by_date(rows, self.time_range, self.date_range, now=now)


def _months_before(moment: datetime, months: int) -> datetime:
    year, month_index = divmod(moment.month - 1 - months, 12)
    year += moment.year
    month = month_index + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def filter_data_by_date(
    rows: Iterable[dict] | None,
    time_range: str,
    date_range: DateRange | None,
    now: datetime | None = None,
) -> list[dict]:
    """Keep report rows whose ``date`` falls in the selected window.

    An explicit range with a start date wins over the preset. Rows with an
    unparseable date are dropped whenever any window applies.
    """
    if not rows:
        return []
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if date_range is not None and date_range.from_date:
        start = parse_timestamp(date_range.from_date)
        end = parse_timestamp(date_range.to_date) or now
        if start is None:
            return []
        kept = []
        for row in rows:
            when = parse_timestamp(row.get("date"))
            if when is not None and start <= when <= end:
                kept.append(row)
        return kept

    if time_range == "all" or time_range not in _TIME_RANGE_MONTHS:
        return list(rows)

    cutoff = _months_before(now, _TIME_RANGE_MONTHS[time_range])
    kept = []
    for row in rows:
        when = parse_timestamp(row.get("date"))
        if when is not None and when >= cutoff:
            kept.append(row)
    return kept


# ── Alerts ───────────────────────────────────────────────────────────────


class AlertFilters:
    """Active/resolved tabs plus priority and type dropdowns."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.status = "active"
        self.priority = "all"
        self.type = "all"

    def set_status(self, status: str) -> None:
        self.status = status

    def set_priority(self, priority: str) -> None:
        self.priority = priority

    def set_type(self, alert_type: str) -> None:
        self.type = alert_type

    def query(self) -> dict:
        """Filter values as the alerts fetch expects them ("" means any)."""
        return {
            "resolved": self.status == "resolved",
            "priority": "" if self.priority == "all" else self.priority,
            "type": "" if self.type == "all" else self.type,
        }
