"""Supabase data gateway — table CRUD over PostgREST (``/rest/v1/{table}``)."""

from typing import Any

import httpx

from moldops.application.interfaces import DataGateway
from moldops.domain.entities import Filter, Order, Record
from moldops.domain.exceptions import GatewayError
from moldops.infrastructure.logging.gateway_logger import GatewayCallLogger, GatewayStage

from .base import SupabaseHTTP, error_message


def _literal(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def filter_params(filters: list[Filter] | None) -> list[tuple[str, str]]:
    """PostgREST query parameters, e.g. ``("user_id", "eq.abc")``."""
    params = []
    for f in filters or []:
        if f.value is None and f.op.value in ("eq", "neq"):
            op = "is" if f.op.value == "eq" else "not.is"
            params.append((f.column, f"{op}.null"))
        else:
            params.append((f.column, f"{f.op.value}.{_literal(f.value)}"))
    return params


def parse_content_range(header: str | None) -> int | None:
    """Total from a ``Content-Range: 0-9/42`` header; None when unknown."""
    if not header or "/" not in header:
        return None
    total = header.rsplit("/", 1)[1].strip()
    return int(total) if total.isdigit() else None


class SupabaseDataGateway(DataGateway):
    """Infrastructure adapter — PostgREST tables of a Supabase project.

    Requests carry the anon key, or the signed-in user's token once
    :meth:`authorize` has been called, so row-level security applies.
    """

    def __init__(
        self,
        url: str,
        anon_key: str,
        *,
        access_token: str | None = None,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._http = SupabaseHTTP(url, anon_key, timeout=timeout, http_client=http_client)
        self._access_token = access_token
        self._log = GatewayCallLogger("SupabaseDataGateway")

    def authorize(self, access_token: str | None) -> None:
        self._access_token = access_token

    async def _call(
        self,
        operation: str,
        table: str,
        method: str,
        *,
        params: list[tuple[str, str]] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        extra = {"Prefer": prefer} if prefer else {}
        headers = self._http.headers(self._access_token, **extra)
        try:
            response = await self._http.send(
                method, f"/rest/v1/{table}", params=params, json=json, headers=headers
            )
        except httpx.HTTPError as exc:
            raise GatewayError(operation, table, 503, f"Gateway unreachable: {exc}") from exc
        if response.status_code >= 400:
            raise GatewayError(operation, table, response.status_code, error_message(response))
        return response

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: list[Filter] | None = None,
        *,
        order: Order | None = None,
        limit: int | None = None,
    ) -> list[Record]:
        params = [("select", "".join(columns.split()) or "*")]
        params.extend(filter_params(filters))
        if order is not None:
            params.append(("order", f"{order.column}.{'asc' if order.ascending else 'desc'}"))
        if limit is not None:
            params.append(("limit", str(limit)))

        with self._log.timed_step(GatewayStage.SELECT, table, columns=columns):
            response = await self._call("select", table, "GET", params=params)
        return response.json()

    async def insert(self, table: str, row: Record) -> Record:
        with self._log.timed_step(GatewayStage.INSERT, table):
            response = await self._call(
                "insert", table, "POST", json=row, prefer="return=representation"
            )
        rows = response.json()
        return rows[0] if isinstance(rows, list) and rows else row

    async def update(self, table: str, record_id: str, patch: Record) -> Record:
        body = {k: v for k, v in patch.items() if k != "id"}
        with self._log.timed_step(GatewayStage.UPDATE, table, id=record_id):
            response = await self._call(
                "update",
                table,
                "PATCH",
                params=[("id", f"eq.{record_id}")],
                json=body,
                prefer="return=representation",
            )
        rows = response.json()
        if not rows:
            raise GatewayError("update", table, 404, f"No row with id '{record_id}'")
        return rows[0]

    async def delete(self, table: str, record_id: str) -> None:
        with self._log.timed_step(GatewayStage.DELETE, table, id=record_id):
            await self._call("delete", table, "DELETE", params=[("id", f"eq.{record_id}")])

    async def count(self, table: str, filters: list[Filter] | None = None) -> int:
        params = [("select", "id"), *filter_params(filters)]
        with self._log.timed_step(GatewayStage.COUNT, table):
            response = await self._call("count", table, "HEAD", params=params, prefer="count=exact")
        total = parse_content_range(response.headers.get("content-range"))
        if total is None:
            raise GatewayError("count", table, response.status_code, "Missing Content-Range total")
        return total
