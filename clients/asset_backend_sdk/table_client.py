from __future__ import annotations

from typing import Any

from clients.asset_backend_sdk.http_client import HttpClient

REST_PREFIX = "/rest/v1"
RETURN_REPRESENTATION = {"Prefer": "return=representation"}


class TableClient:
    """Row access for the hosted database REST API (PostgREST query dialect)."""

    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def fetch_rows(
        self,
        resource: str,
        *,
        filters: dict[str, Any] | None = None,
        order: tuple[str, str] | None = None,
        select: str = "*",
    ) -> list[dict[str, Any]]:
        params = {"select": select, **_eq_params(filters)}
        if order is not None:
            column, direction = order
            params["order"] = f"{column}.{direction}"
        payload = self.http_client.request("GET", f"{REST_PREFIX}/{resource}", params=params)
        return _rows(payload)

    def fetch_row(self, resource: str, key: str, value: Any, *, select: str = "*") -> dict[str, Any] | None:
        params = {"select": select, **_eq_params({key: value})}
        payload = self.http_client.request("GET", f"{REST_PREFIX}/{resource}", params=params)
        rows = _rows(payload)
        return rows[0] if rows else None

    def insert_row(self, resource: str, values: dict[str, Any]) -> dict[str, Any]:
        payload = self.http_client.request(
            "POST",
            f"{REST_PREFIX}/{resource}",
            json_body=values,
            headers=RETURN_REPRESENTATION,
        )
        return _single(payload)

    def update_row(self, resource: str, row_id: str, values: dict[str, Any]) -> dict[str, Any]:
        payload = self.http_client.request(
            "PATCH",
            f"{REST_PREFIX}/{resource}",
            json_body=values,
            headers=RETURN_REPRESENTATION,
            params=_eq_params({"id": row_id}),
        )
        return _single(payload)

    def delete_row(self, resource: str, row_id: str) -> None:
        self.http_client.request("DELETE", f"{REST_PREFIX}/{resource}", params=_eq_params({"id": row_id}))


def _eq_params(filters: dict[str, Any] | None) -> dict[str, str]:
    params: dict[str, str] = {}
    for key, value in (filters or {}).items():
        if value in (None, ""):
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        params[key] = f"eq.{value}"
    return params


def _rows(payload: dict[str, Any]) -> list[dict[str, Any]]:
    rows = payload.get("data")
    if isinstance(rows, list):
        return [row for row in rows if isinstance(row, dict)]
    if payload and "id" in payload:
        return [payload]
    return []


def _single(payload: dict[str, Any]) -> dict[str, Any]:
    rows = _rows(payload)
    return rows[0] if rows else {}
