"""Flask JSON endpoints feeding the fleet dashboard views."""

from __future__ import annotations

import os
import sys
from dataclasses import asdict
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify, request

load_dotenv()

from fleet_dashboard.errors import ApiError, ErrorHandler
from fleet_dashboard.extractors import (
    extract_flight_info,
    format_vehicle_id,
    parse_flight_details,
    parse_passengers,
)
from fleet_dashboard.feeds import (
    DEFAULT_ACTIVITY_LIMIT,
    ActivitiesFeed,
    fetch_alerts,
    fetch_spare_parts,
    fetch_trips,
    log_activity,
    to_activity_items,
)
from fleet_dashboard.models import ACTIVITY_TYPES, SortConfig
from fleet_dashboard.notifications import ToastQueue
from fleet_dashboard.supabase_store import RemoteStore, SupabaseStore
from fleet_dashboard.view_models import AlertFilters, PartsFilter, TripFilter

app = Flask(__name__)

# Shared store client (lazy init)
_store: RemoteStore | None = None

# Toasts raised by failed fetches, drained by the UI poller
_toasts = ToastQueue()
_handler = ErrorHandler(_toasts)

_feed: ActivitiesFeed | None = None


def _get_store() -> RemoteStore:
    global _store
    if _store is None:
        _store = SupabaseStore()
    return _store


def set_store(store: RemoteStore | None) -> None:
    """Swap the backing store (tests, alternative backends)."""
    global _store, _feed
    _store = store
    _feed = None


def _get_feed() -> ActivitiesFeed:
    global _feed
    if _feed is None:
        _feed = ActivitiesFeed(_get_store(), _handler)
    return _feed


def _error_response(exc: ApiError):
    return jsonify({"error": exc.message, "code": exc.code}), exc.status or 500


# ── API Routes ───────────────────────────────────────────────────────────

@app.route("/api/trips")
def api_trips():
    """Trips table, filtered by ?search= and ?status=."""
    try:
        trips = fetch_trips(_get_store(), _handler)
    except ApiError as e:
        return _error_response(e)

    view = TripFilter(trips)
    view.set_search_term(request.args.get("search", ""))
    view.set_status_filter(request.args.get("status", "all"))
    rows = []
    for trip in view.filtered_trips:
        row = trip.to_dict()
        row["flight_info"] = extract_flight_info(trip.notes)
        row["flight"] = asdict(parse_flight_details(trip.notes))
        row["passengers"] = parse_passengers(trip.notes)
        rows.append(row)
    return jsonify({"count": len(rows), "trips": rows})


@app.route("/api/parts")
def api_parts():
    """Spare parts, ordered by ?sort=column&direction=asc|desc, searched by ?search=."""
    direction = request.args.get("direction", "desc")
    sort_config = SortConfig(
        column=request.args.get("sort", "updated_at"),
        direction="asc" if direction == "asc" else "desc",
    )
    try:
        parts = fetch_spare_parts(_get_store(), _handler, sort_config)
    except ApiError as e:
        return _error_response(e)

    view = PartsFilter(parts)
    view.set_search_query(request.args.get("search", ""))
    return jsonify({
        "count": len(view.filtered_parts),
        "parts": [p.to_dict() for p in view.filtered_parts],
        "in_stock": len(view.in_stock_parts),
        "low_stock": len(view.low_stock_parts),
        "out_of_stock": len(view.out_of_stock_parts),
    })


@app.route("/api/activities")
def api_activities():
    """Latest activities for the feed (?limit=, default 5)."""
    limit = request.args.get("limit", DEFAULT_ACTIVITY_LIMIT, type=int)
    try:
        activities = _get_feed().refresh(limit)
    except ApiError as e:
        return _error_response(e)
    return jsonify({
        "count": len(activities),
        "activities": [a.to_dict() for a in to_activity_items(activities)],
    })


@app.route("/api/activities", methods=["POST"])
def api_log_activity():
    """Record an activity: JSON {title, type, related_id?}."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}
    title = str(body.get("title") or "").strip()
    activity_type = body.get("type")
    if not title:
        return jsonify({"error": "Missing 'title' field"}), 400
    if activity_type not in ACTIVITY_TYPES:
        return jsonify({"error": f"Unknown activity type: {activity_type}"}), 400

    item = log_activity(_get_store(), title, activity_type, related_id=body.get("related_id"))
    return jsonify(item.to_dict()), 201


@app.route("/api/alerts")
def api_alerts():
    """Alerts filtered by ?status=active|resolved, ?priority=, ?type=, ?limit=."""
    filters = AlertFilters()
    filters.set_status(request.args.get("status", "active"))
    filters.set_priority(request.args.get("priority", "all"))
    filters.set_type(request.args.get("type", "all"))
    query = filters.query()
    try:
        alerts = fetch_alerts(
            _get_store(),
            active_only=not query["resolved"],
            resolved_only=query["resolved"],
            limit=request.args.get("limit", type=int),
            type=query["type"] or None,
            priority=query["priority"] or None,
        )
    except ApiError as e:
        return _error_response(e)
    return jsonify({"count": len(alerts), "alerts": [a.to_dict() for a in alerts]})


@app.route("/api/vehicle-code/<vehicle_id>")
def api_vehicle_code(vehicle_id: str):
    """Short display code for a vehicle id."""
    return jsonify({"id": vehicle_id, "code": format_vehicle_id(vehicle_id)})


@app.route("/api/notifications")
def api_notifications():
    """Pending toasts; each is returned once."""
    return jsonify({"notifications": [n.to_dict() for n in _toasts.drain()]})


# ── Entry Point ──────────────────────────────────────────────────────────

def main():
    """Run the dashboard server."""
    port = int(os.getenv("DASHBOARD_PORT", "5030"))
    debug = os.getenv("DASHBOARD_DEBUG", "false").lower() == "true"
    print(f"Fleet Dashboard starting on http://localhost:{port}")
    app.run(host="0.0.0.0", port=port, debug=debug, threaded=True)


if __name__ == "__main__":
    # Allow running from project root: python -m fleet_dashboard.dashboard
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
    main()
