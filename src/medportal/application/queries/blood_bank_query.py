"""Blood-bank inventory query."""

from __future__ import annotations

from typing import TYPE_CHECKING

from medportal.application.ports import OrderBy, RowStore
from medportal.domain.records import BLOOD_BANK_TABLE, BloodStock, StockStatus

if TYPE_CHECKING:
    from medportal.application.factories import PortalFactory


class BloodBankInventoryQuery:
    """Blood stock per blood type, ordered by blood type."""

    def __init__(self, row_store: RowStore):
        self._rows = row_store

    @classmethod
    def from_factory(cls, factory: PortalFactory) -> BloodBankInventoryQuery:
        return cls(row_store=factory.row_store())

    async def execute(self) -> list[BloodStock]:
        rows = await self._rows.select(BLOOD_BANK_TABLE, order_by=OrderBy("blood_type"))
        return [BloodStock.from_row(row) for row in rows]

    async def shortages(self) -> list[BloodStock]:
        """Blood types that are not in good supply."""
        return [
            stock
            for stock in await self.execute()
            if stock.stock_status != StockStatus.GOOD
        ]
