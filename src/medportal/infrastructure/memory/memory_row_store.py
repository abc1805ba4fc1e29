"""In-process row store for development and tests.

Tables are lists of row dicts. A table may be given a fixed column set; any
query or write naming another column then fails the way Postgres does
(SQLSTATE 42703), which lets older schemas be reproduced.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any
from uuid import uuid4

from medportal.application.ports import (
    ChangeType,
    OrderBy,
    Row,
    RowChange,
    RowChangeCallback,
    RowStore,
    Subscription,
)
from medportal.domain.shared import MissingColumnError, utc_now

logger = logging.getLogger(__name__)

UNDEFINED_COLUMN = "42703"


def _sort_key(value: Any) -> tuple[int, Any]:
    # Nulls sort last, as in Postgres ascending order
    return (1, "") if value is None else (0, value)


class InMemoryRowStore(RowStore):
    """Dict-backed tables shared by everything holding this instance."""

    def __init__(self, columns: Mapping[str, Iterable[str]] | None = None):
        self._tables: dict[str, list[Row]] = {}
        self._columns = {table: set(cols) for table, cols in (columns or {}).items()}
        self._subscribers: dict[str, list[RowChangeCallback]] = {}

    def seed(self, table: str, rows: Iterable[Mapping[str, Any]]) -> None:
        """Load rows without raising change notifications."""
        self._tables.setdefault(table, []).extend(dict(row) for row in rows)

    def rows(self, table: str) -> list[Row]:
        return copy.deepcopy(self._tables.get(table, []))

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
        named = list(columns or []) + list(filters or {})
        if order_by is not None:
            named.append(order_by.column)
        self._check_columns(table, named)

        rows = self._matching(table, filters)
        if order_by is not None:
            rows.sort(
                key=lambda row: _sort_key(row.get(order_by.column)),
                reverse=order_by.descending,
            )
        if columns:
            rows = [{column: row.get(column) for column in columns} for row in rows]
        return copy.deepcopy(rows)

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        self._check_columns(table, row)
        stored = dict(row)
        stored.setdefault("id", str(uuid4()))
        if self._has_column(table, "created_at"):
            stored.setdefault("created_at", utc_now().isoformat())
        self._tables.setdefault(table, []).append(stored)
        self._notify(RowChange(table, ChangeType.INSERT, copy.deepcopy(stored)))
        return copy.deepcopy(stored)

    async def update(
        self,
        table: str,
        values: Mapping[str, Any],
        filters: Mapping[str, Any],
    ) -> list[Row]:
        self._check_columns(table, list(values) + list(filters))
        updated = []
        for row in self._matching(table, filters):
            row.update(values)
            updated.append(copy.deepcopy(row))
        for row in updated:
            self._notify(RowChange(table, ChangeType.UPDATE, row))
        return updated

    async def delete(self, table: str, filters: Mapping[str, Any]) -> list[Row]:
        self._check_columns(table, filters)
        doomed = self._matching(table, filters)
        self._tables[table] = [
            row for row in self._tables.get(table, []) if row not in doomed
        ]
        deleted = copy.deepcopy(doomed)
        for row in deleted:
            self._notify(RowChange(table, ChangeType.DELETE, row))
        return deleted

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

    def _matching(self, table: str, filters: Mapping[str, Any] | None) -> list[Row]:
        return [
            row
            for row in self._tables.get(table, [])
            if all(row.get(col) == value for col, value in (filters or {}).items())
        ]

    def _has_column(self, table: str, column: str) -> bool:
        allowed = self._columns.get(table)
        return allowed is None or column in allowed

    def _check_columns(self, table: str, columns: Iterable[str]) -> None:
        for column in columns:
            if not self._has_column(table, column):
                msg = f"column {table}.{column} does not exist"
                raise MissingColumnError(msg, backend_code=UNDEFINED_COLUMN, column=column)

    def _notify(self, change: RowChange) -> None:
        for callback in list(self._subscribers.get(change.table, [])):
            try:
                callback(change)
            except Exception:
                logger.exception("Row change callback failed for %s", change.table)
