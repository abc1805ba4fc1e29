"""Doctor directory query."""

from __future__ import annotations

from typing import TYPE_CHECKING

from medportal.application.ports import OrderBy, RowStore
from medportal.domain.records import DEPARTMENTS_TABLE, DOCTORS_TABLE, Doctor

if TYPE_CHECKING:
    from medportal.application.factories import PortalFactory

ALL_DEPARTMENTS = "all"


class ListDoctorsQuery:
    """Doctors ordered by name, joined with their department's name."""

    def __init__(self, row_store: RowStore):
        self._rows = row_store

    @classmethod
    def from_factory(cls, factory: PortalFactory) -> ListDoctorsQuery:
        return cls(row_store=factory.row_store())

    async def execute(
        self,
        department_id: str | None = None,
        search: str = "",
    ) -> list[Doctor]:
        department_rows = await self._rows.select(
            DEPARTMENTS_TABLE,
            columns=["id", "name"],
        )
        names = {str(row["id"]): str(row["name"]) for row in department_rows}

        rows = await self._rows.select(DOCTORS_TABLE, order_by=OrderBy("name"))
        doctors = [Doctor.from_row(row, names) for row in rows]

        if department_id == ALL_DEPARTMENTS:
            department_id = None
        return [d for d in doctors if d.matches(department_id, search)]
