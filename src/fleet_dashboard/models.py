"""Row shapes returned by the fleet data store."""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass
from typing import Literal

from fleet_dashboard.extractors import extract_trip_status, format_service_type

TRIP_STATUSES = ("scheduled", "in_progress", "completed", "cancelled")
PART_STATUSES = ("in_stock", "low_stock", "out_of_stock")
ACTIVITY_TYPES = ("trip", "maintenance", "vehicle", "driver", "client", "fuel", "contract")
ALERT_TYPES = ("maintenance", "driver", "fuel", "vehicle", "trip", "contract")
ALERT_PRIORITIES = ("high", "medium", "low")

SERVICE_TYPE_LABELS = {
    "airport_pickup": "Airport Pickup",
    "airport_dropoff": "Airport Dropoff",
    "other": "Other Service",
    "hourly": "Hourly Service",
    "full_day": "Full Day",
    "multi_day": "Multi Day",
    "one_way_transfer": "One Way Transfer",
    "round_trip": "Round Trip",
    "security_escort": "Security Escort",
}


def validate_trip_status(status: str | None) -> str:
    """Known trip status, or "scheduled" for anything else."""
    return status if status in TRIP_STATUSES else "scheduled"


@dataclass(slots=True)
class Trip:
    """Display projection of a trip joined with its client, driver and vehicle."""

    id: str
    client_name: str = "Unknown Client"
    driver_name: str = "No Driver"
    vehicle_details: str = "No Vehicle"
    status: str = "scheduled"
    date: str | None = None
    time: str | None = None
    notes: str | None = None
    pickup_location: str | None = None
    dropoff_location: str | None = None
    service_type: str = "other"
    display_type: str = "Other Service"

    @classmethod
    def from_row(cls, row: dict) -> "Trip":
        client = row.get("clients") or {}
        vehicle = row.get("vehicles")
        driver = row.get("drivers") or {}
        notes = row.get("notes") or row.get("special_instructions")
        service_type = row.get("service_type") or "other"

        if vehicle:
            vehicle_details = (
                f"{vehicle.get('make', '')} {vehicle.get('model', '')} "
                f"({vehicle.get('registration', '')})"
            )
        else:
            vehicle_details = "No Vehicle"

        return cls(
            id=str(row.get("id", "")),
            client_name=client.get("name") or "Unknown Client",
            driver_name=driver.get("name") or "No Driver",
            vehicle_details=vehicle_details,
            status=validate_trip_status(row.get("status") or extract_trip_status(notes)),
            date=row.get("date"),
            time=row.get("time"),
            notes=notes,
            pickup_location=row.get("pickup_location"),
            dropoff_location=row.get("dropoff_location"),
            service_type=service_type,
            display_type=SERVICE_TYPE_LABELS.get(service_type) or format_service_type(service_type),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class SparePart:
    id: str
    name: str = ""
    part_number: str = ""
    category: str = ""
    manufacturer: str = ""
    location: str = ""
    quantity: int = 0
    status: str = "in_stock"
    updated_at: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> "SparePart":
        return cls(
            id=str(row.get("id", "")),
            name=row.get("name") or "",
            part_number=row.get("part_number") or "",
            category=row.get("category") or "",
            manufacturer=row.get("manufacturer") or "",
            location=row.get("location") or "",
            quantity=int(row.get("quantity") or 0),
            status=row.get("status") or "in_stock",
            updated_at=row.get("updated_at"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class Activity:
    id: str
    title: str
    timestamp: str
    type: str
    related_id: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> "Activity":
        return cls(
            id=str(row.get("id", "")),
            title=row.get("title", ""),
            timestamp=row.get("timestamp", ""),
            type=row.get("type", ""),
            related_id=row.get("related_id"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class Alert:
    id: str
    title: str
    priority: str
    date: str
    type: str
    resolved: bool = False
    description: str | None = None
    related_id: str | None = None
    related_type: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> "Alert":
        return cls(
            id=str(row.get("id", "")),
            title=row.get("title", ""),
            priority=row.get("priority", "low"),
            date=row.get("date", ""),
            type=row.get("type", ""),
            resolved=bool(row.get("resolved", False)),
            description=row.get("description"),
            related_id=row.get("related_id"),
            related_type=row.get("related_type"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SortConfig:
    """Column ordering requested from the store. Replaced, never mutated."""

    column: str = "updated_at"
    direction: Literal["asc", "desc"] = "desc"

    @property
    def ascending(self) -> bool:
        return self.direction == "asc"


@dataclass(frozen=True)
class DateRange:
    from_date: dt.date | str | None = None
    to_date: dt.date | str | None = None


@dataclass(slots=True)
class ActivityItem:
    """Activity as shown in the feed, with a relative timestamp."""

    id: str
    title: str
    timestamp: str
    type: str
    icon: str = "activity"

    def to_dict(self) -> dict:
        return asdict(self)
