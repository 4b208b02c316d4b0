"""Fetch hooks: pull named collections from the store for the dashboard views."""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock

from fleet_dashboard.errors import ApiError, ErrorHandler, normalize_error
from fleet_dashboard.models import Activity, ActivityItem, Alert, SortConfig, SparePart, Trip
from fleet_dashboard.supabase_store import RemoteStore
from fleet_dashboard.utils import format_time_ago

DEFAULT_ACTIVITY_LIMIT = 5

TRIP_COLUMNS = (
    "*, clients(name, type), vehicles(make, model, registration), "
    "drivers(name, avatar_url, contact)"
)

ACTIVITY_ICONS = {
    "trip": "calendar",
    "maintenance": "clock",
    "vehicle": "car",
    "driver": "user",
    "client": "building",
    "fuel": "fuel",
    "contract": "file-check",
}


def fetch_activities(
    store: RemoteStore,
    handler: ErrorHandler,
    limit: int = DEFAULT_ACTIVITY_LIMIT,
) -> list[Activity]:
    """Most recent activities, newest first.

    Failures are reported through the handler and raised as ApiError, so an
    unavailable feed is never mistaken for an empty one.
    """
    try:
        rows = store.select(
            "activities",
            order_by="timestamp",
            ascending=False,
            limit=limit,
        )
    except Exception as exc:
        raise handler.handle(exc, "Failed to fetch activities") from exc
    return [Activity.from_row(row) for row in rows]


class ActivitiesFeed:
    """Latest activities for the dashboard sidebar.

    A refresh started later always wins: results of superseded requests are
    returned to their caller but never replace the current feed.
    """

    def __init__(
        self,
        store: RemoteStore,
        handler: ErrorHandler,
        limit: int = DEFAULT_ACTIVITY_LIMIT,
    ) -> None:
        self._store = store
        self._handler = handler
        self.limit = limit
        self.activities: list[Activity] = []
        self.error: ApiError | None = None
        self._generation = 0
        # Guards limit, generation and the feed state; never held during a fetch
        self._lock = Lock()

    def refresh(self, limit: int | None = None) -> list[Activity]:
        with self._lock:
            if limit is None:
                limit = self.limit
            self.limit = limit
            self._generation += 1
            generation = self._generation
        try:
            activities = fetch_activities(self._store, self._handler, limit)
        except ApiError as exc:
            with self._lock:
                if generation == self._generation:
                    self.error = exc
            raise
        with self._lock:
            if generation == self._generation:
                self.activities = activities
                self.error = None
        return activities

    @property
    def is_stale(self) -> bool:
        return self.error is not None


def fetch_alerts(
    store: RemoteStore,
    active_only: bool = True,
    limit: int | None = None,
    type: str | None = None,
    priority: str | None = None,
    resolved_only: bool = False,
) -> list[Alert]:
    """Alerts newest first, optionally narrowed by status, type and priority."""
    filters: dict[str, object] = {}
    if resolved_only:
        filters["resolved"] = True
    elif active_only:
        filters["resolved"] = False
    if type:
        filters["type"] = type
    if priority:
        filters["priority"] = priority

    try:
        rows = store.select(
            "alerts",
            order_by="date",
            ascending=False,
            limit=limit,
            filters=filters,
        )
    except Exception as exc:
        print(f"[alerts] Error fetching alerts: {exc}", flush=True)
        raise normalize_error(exc) from exc
    return [Alert.from_row(row) for row in rows]


def fetch_trips(store: RemoteStore, handler: ErrorHandler) -> list[Trip]:
    """All trips joined with client, vehicle and driver, newest date first."""
    try:
        rows = store.select("trips", columns=TRIP_COLUMNS, order_by="date", ascending=False)
    except Exception as exc:
        raise handler.handle(exc, "Failed to fetch trips") from exc
    return [Trip.from_row(row) for row in rows]


def fetch_spare_parts(
    store: RemoteStore,
    handler: ErrorHandler,
    sort_config: SortConfig | None = None,
) -> list[SparePart]:
    """Parts inventory ordered server-side by the table's sort config."""
    sort_config = sort_config or SortConfig()
    try:
        rows = store.select(
            "spare_parts",
            order_by=sort_config.column,
            ascending=sort_config.ascending,
        )
    except Exception as exc:
        raise handler.handle(exc, "Failed to fetch spare parts") from exc
    return [SparePart.from_row(row) for row in rows]


def log_activity(
    store: RemoteStore,
    title: str,
    type: str,
    related_id: str | None = None,
    now: datetime | None = None,
) -> ActivityItem:
    """Record an activity and return it ready for the feed.

    The feed entry is returned even if the store write fails; the failure is
    only logged.
    """
    timestamp = now or datetime.now(timezone.utc)
    item = ActivityItem(
        id=str(int(timestamp.timestamp() * 1000)),
        title=title,
        timestamp=format_time_ago(timestamp, now=timestamp),
        type=type,
        icon=ACTIVITY_ICONS.get(type, "activity"),
    )
    try:
        store.insert(
            "activities",
            [{
                "title": title,
                "type": type,
                "related_id": related_id,
                "timestamp": timestamp.isoformat(),
            }],
        )
    except Exception as e:
        print(f"[activity] Failed to log activity to database: {e}", flush=True)
    return item


def to_activity_items(activities: list[Activity], now: datetime | None = None) -> list[ActivityItem]:
    """Feed projection with relative timestamps and icons."""
    return [
        ActivityItem(
            id=a.id,
            title=a.title,
            timestamp=format_time_ago(a.timestamp, now=now),
            type=a.type,
            icon=ACTIVITY_ICONS.get(a.type, "activity"),
        )
        for a in activities
    ]
