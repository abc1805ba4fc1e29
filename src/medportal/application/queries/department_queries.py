"""Department and waiting-queue queries."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from medportal.application.ports import OrderBy, RowStore
from medportal.domain.records import (
    DEPARTMENTS_TABLE,
    WAITING_LIST_TABLE,
    Department,
    DepartmentQueue,
    WaitingListEntry,
    WaitingStatus,
)

if TYPE_CHECKING:
    from medportal.application.factories import PortalFactory


class ListDepartmentsQuery:
    """Departments ordered by name."""

    def __init__(self, row_store: RowStore):
        self._rows = row_store

    @classmethod
    def from_factory(cls, factory: PortalFactory) -> ListDepartmentsQuery:
        return cls(row_store=factory.row_store())

    async def execute(self) -> list[Department]:
        rows = await self._rows.select(DEPARTMENTS_TABLE, order_by=OrderBy("name"))
        return [Department.from_row(row) for row in rows]


class WaitingCountsQuery:
    """Number of patients still waiting, per department id."""

    def __init__(self, row_store: RowStore):
        self._rows = row_store

    @classmethod
    def from_factory(cls, factory: PortalFactory) -> WaitingCountsQuery:
        return cls(row_store=factory.row_store())

    async def execute(self) -> dict[str, int]:
        rows = await self._rows.select(
            WAITING_LIST_TABLE,
            columns=["department_id"],
            filters={"status": WaitingStatus.WAITING.value},
        )
        return dict(Counter(str(row["department_id"]) for row in rows))

    async def queues(self, departments: list[Department]) -> list[DepartmentQueue]:
        """Pair each department with its current waiting count."""
        counts = await self.execute()
        return [
            DepartmentQueue(department=department, waiting=counts.get(department.id, 0))
            for department in departments
        ]


class ListWaitingListQuery:
    """Every waiting-list entry, newest first (admin view)."""

    def __init__(self, row_store: RowStore):
        self._rows = row_store

    @classmethod
    def from_factory(cls, factory: PortalFactory) -> ListWaitingListQuery:
        return cls(row_store=factory.row_store())

    async def execute(
        self,
        status: WaitingStatus | None = None,
    ) -> list[WaitingListEntry]:
        filters = {"status": status.value} if status else None
        rows = await self._rows.select(
            WAITING_LIST_TABLE,
            filters=filters,
            order_by=OrderBy("created_at", descending=True),
        )
        return [WaitingListEntry.from_row(row) for row in rows]
