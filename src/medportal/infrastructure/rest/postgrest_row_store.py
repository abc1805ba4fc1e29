"""HTTP client for a Supabase-compatible row API (PostgREST).

Change notifications are local: every successful write made through this
client is announced to its own subscribers. Writes from other clients are
not observed.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import httpx

from medportal.application.ports import (
    ChangeType,
    OrderBy,
    Row,
    RowChange,
    RowChangeCallback,
    RowStore,
    Subscription,
)
from medportal.domain.shared import (
    BackendUnavailableError,
    MissingColumnError,
    RowStoreError,
)

logger = logging.getLogger(__name__)

# Postgres undefined_column, PostgREST schema-cache miss
MISSING_COLUMN_CODES = frozenset({"42703", "PGRST204"})

_COLUMN_PATTERNS = (
    re.compile(r"column (?:\w+\.)?\"?(\w+)\"? does not exist"),
    re.compile(r"Could not find the '(\w+)' column"),
)


def _filter_value(value: Any) -> str:
    if value is None:
        return "is.null"
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    return f"eq.{value}"


def _query_params(
    columns: Sequence[str] | None = None,
    filters: Mapping[str, Any] | None = None,
    order_by: OrderBy | None = None,
) -> dict[str, str]:
    params = {"select": ",".join(columns) if columns else "*"}
    for column, value in (filters or {}).items():
        params[column] = _filter_value(value)
    if order_by is not None:
        direction = "desc" if order_by.descending else "asc"
        params["order"] = f"{order_by.column}.{direction}"
    return params


def _missing_column(message: str) -> str | None:
    for pattern in _COLUMN_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(1)
    return None


def _to_error(response: httpx.Response) -> RowStoreError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    backend_code = body.get("code")
    message = body.get("message") or response.text[:200] or f"HTTP {response.status_code}"
    if backend_code in MISSING_COLUMN_CODES:
        return MissingColumnError(
            message,
            backend_code=backend_code,
            column=_missing_column(message),
        )
    return RowStoreError(
        message,
        backend_code=backend_code,
        details={"status": response.status_code, "hint": body.get("hint")},
    )


class PostgrestRowStore(RowStore):
    """Row store talking to ``<baas_url>/rest/v1``."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        access_token: Callable[[], str | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._access_token = access_token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._subscribers: dict[str, list[RowChangeCallback]] = {}

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={"apikey": self._api_key},
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # -------------------------------------------------------------------------
    # RowStore
    # -------------------------------------------------------------------------

    async def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        filters: Mapping[str, Any] | None = None,
        order_by: OrderBy | None = None,
    ) -> list[Row]:
        response = await self._request(
            "GET",
            table,
            params=_query_params(columns, filters, order_by),
        )
        return list(response.json())

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        response = await self._request(
            "POST",
            table,
            json=dict(row),
            params={"select": "*"},
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        inserted = rows[0] if rows else dict(row)
        self._notify(RowChange(table, ChangeType.INSERT, inserted))
        return inserted

    async def update(
        self,
        table: str,
        values: Mapping[str, Any],
        filters: Mapping[str, Any],
    ) -> list[Row]:
        response = await self._request(
            "PATCH",
            table,
            json=dict(values),
            params=_query_params(filters=filters),
            headers={"Prefer": "return=representation"},
        )
        rows = list(response.json())
        for row in rows:
            self._notify(RowChange(table, ChangeType.UPDATE, row))
        return rows

    async def delete(self, table: str, filters: Mapping[str, Any]) -> list[Row]:
        response = await self._request(
            "DELETE",
            table,
            params=_query_params(filters=filters),
            headers={"Prefer": "return=representation"},
        )
        rows = list(response.json())
        for row in rows:
            self._notify(RowChange(table, ChangeType.DELETE, row))
        return rows

    def subscribe(self, table: str, callback: RowChangeCallback) -> Subscription:
        callbacks = self._subscribers.setdefault(table, [])
        callbacks.append(callback)

        def _remove() -> None:
            if callback in callbacks:
                callbacks.remove(callback)

        return Subscription(_remove)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        table: str,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        client = await self._get_client()
        request_headers = dict(headers or {})
        token = self._access_token() if self._access_token else None
        request_headers["Authorization"] = f"Bearer {token or self._api_key}"
        try:
            response = await client.request(
                method,
                f"/{table}",
                params=params,
                json=json,
                headers=request_headers,
            )
        except httpx.ConnectError as e:
            logger.warning("Row service connection failed: %s", e)
            raise BackendUnavailableError from e
        except httpx.TimeoutException as e:
            logger.warning("Row service timeout: %s", e)
            raise BackendUnavailableError from e
        except httpx.HTTPError as e:
            logger.warning("Row service request failed (%s): %s", type(e).__name__, e)
            raise BackendUnavailableError from e

        if response.is_error:
            error = _to_error(response)
            logger.debug("%s %s rejected: %s", method, table, error.message)
            raise error
        return response

    def _notify(self, change: RowChange) -> None:
        for callback in list(self._subscribers.get(change.table, [])):
            try:
                callback(change)
            except Exception:
                logger.exception("Row change callback failed for %s", change.table)
