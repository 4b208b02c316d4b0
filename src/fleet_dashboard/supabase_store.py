"""Supabase (PostgREST) client for the fleet tables."""

from __future__ import annotations

import os
from typing import Any, Protocol

import httpx

from fleet_dashboard.errors import ApiError


class RemoteStore(Protocol):
    """Table-oriented data store the fetch hooks read from."""

    def select(
        self,
        table: str,
        columns: str = "*",
        order_by: str | None = None,
        ascending: bool = True,
        limit: int | None = None,
        filters: dict[str, Any] | None = None,
    ) -> list[dict]:
        ...

    def insert(self, table: str, rows: list[dict]) -> list[dict]:
        ...


def _filter_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SupabaseStore:
    """Client for the Supabase REST API (PostgREST dialect)."""

    def __init__(
        self,
        url: str | None = None,
        key: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._url = (url or os.getenv("SUPABASE_URL", "")).rstrip("/")
        self._key = key or os.getenv("SUPABASE_KEY", "")
        self._timeout = timeout or float(os.getenv("SUPABASE_TIMEOUT", "15"))
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            if not all([self._url, self._key]):
                raise ApiError(
                    "Missing Supabase credentials. Set SUPABASE_URL and SUPABASE_KEY "
                    "environment variables."
                )
            self._client = httpx.Client(
                base_url=f"{self._url}/rest/v1",
                headers={
                    "apikey": self._key,
                    "Authorization": f"Bearer {self._key}",
                    "Accept": "application/json",
                },
                timeout=self._timeout,
            )
        return self._client

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            resp = self.client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            raise ApiError(str(exc)) from exc

        if resp.status_code >= 400:
            raise _error_from_response(resp)
        if not resp.content:
            return []
        return resp.json()

    def select(
        self,
        table: str,
        columns: str = "*",
        order_by: str | None = None,
        ascending: bool = True,
        limit: int | None = None,
        filters: dict[str, Any] | None = None,
    ) -> list[dict]:
        """Read rows from a table.

        ``filters`` are equality matches (``column=eq.value``).
        """
        params: dict[str, str] = {"select": columns}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{_filter_value(value)}"
        if order_by:
            params["order"] = f"{order_by}.{'asc' if ascending else 'desc'}"
        if limit is not None:
            params["limit"] = str(limit)
        return self._request("GET", f"/{table}", params=params)

    def insert(self, table: str, rows: list[dict]) -> list[dict]:
        """Insert rows and return them as stored."""
        return self._request(
            "POST",
            f"/{table}",
            json=rows,
            headers={"Prefer": "return=representation"},
        )

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None


def _error_from_response(resp: httpx.Response) -> ApiError:
    """Build an ApiError from a PostgREST error body ({message, code, ...})."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return ApiError(body["message"], status=resp.status_code, code=body.get("code"))
    return ApiError(
        f"Request failed with status {resp.status_code}",
        status=resp.status_code,
    )
