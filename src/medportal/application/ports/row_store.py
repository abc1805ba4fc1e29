"""Row store port - table access on the hosted backend.

The application layer reads and writes plain row dicts through this port
and never sees HTTP or SQL. Filters are equality matches on a column.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from medportal.application.ports.subscription import Subscription

Row = dict[str, Any]


class ChangeType(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class RowChange:
    """A change to one table, delivered to subscribers."""

    table: str
    change_type: ChangeType
    row: Row = field(default_factory=dict)


RowChangeCallback = Callable[[RowChange], None]


@dataclass(frozen=True)
class OrderBy:
    column: str
    descending: bool = False


class RowStore(ABC):
    """Port for table rows on the hosted backend."""

    @abstractmethod
    async def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        filters: Mapping[str, Any] | None = None,
        order_by: OrderBy | None = None,
    ) -> list[Row]:
        """Return matching rows.

        Raises
        ------
        MissingColumnError
            If a filter or order column does not exist on the table.
        RowStoreError
            For any other backend rejection.
        """

    @abstractmethod
    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        """Insert one row and return it as stored (with generated columns)."""

    @abstractmethod
    async def update(
        self,
        table: str,
        values: Mapping[str, Any],
        filters: Mapping[str, Any],
    ) -> list[Row]:
        """Update matching rows and return them."""

    @abstractmethod
    async def delete(self, table: str, filters: Mapping[str, Any]) -> list[Row]:
        """Delete matching rows and return them."""

    @abstractmethod
    def subscribe(self, table: str, callback: RowChangeCallback) -> Subscription:
        """Call ``callback`` for every change to ``table``."""
