from __future__ import annotations

from typing import Any, Generator

import pytest
from flask.testing import FlaskClient

from fleet_dashboard import dashboard
from fleet_dashboard.errors import ErrorHandler


class FakeStore:
    """Canned rows per table; records every query it receives."""

    def __init__(self, tables: dict[str, list[dict]] | None = None) -> None:
        self.tables = tables or {}
        self.failures: dict[str, Exception] = {}
        self.selects: list[dict[str, Any]] = []
        self.inserts: list[tuple[str, list[dict]]] = []

    def select(
        self,
        table: str,
        columns: str = "*",
        order_by: str | None = None,
        ascending: bool = True,
        limit: int | None = None,
        filters: dict[str, Any] | None = None,
    ) -> list[dict]:
        self.selects.append({
            "table": table,
            "columns": columns,
            "order_by": order_by,
            "ascending": ascending,
            "limit": limit,
            "filters": filters,
        })
        if table in self.failures:
            raise self.failures[table]
        rows = list(self.tables.get(table, []))
        return rows[:limit] if limit is not None else rows

    def insert(self, table: str, rows: list[dict]) -> list[dict]:
        if table in self.failures:
            raise self.failures[table]
        self.inserts.append((table, rows))
        self.tables.setdefault(table, []).extend(rows)
        return rows


class RecordingNotifier:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str]] = []

    def notify(self, title: str, description: str, severity: str = "default") -> None:
        self.calls.append((title, description, severity))


@pytest.fixture()
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def handler(notifier: RecordingNotifier) -> ErrorHandler:
    return ErrorHandler(notifier)


@pytest.fixture()
def client(store: FakeStore) -> Generator[FlaskClient, None, None]:
    dashboard.set_store(store)
    dashboard._toasts.drain()
    dashboard.app.config["TESTING"] = True
    with dashboard.app.test_client() as c:
        yield c
    dashboard.set_store(None)
