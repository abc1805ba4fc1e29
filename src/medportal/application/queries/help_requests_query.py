"""Help request listing with a fallback for schemas without facility ids.

Deployments created before facilities were introduced have no
``help_requests.hospital_id`` column. Filtering on it fails there, so the
query falls back to fetching everything and filtering locally, and
remembers the outcome in ``ColumnCapabilities`` for later calls.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from medportal.application.ports import CurrentActor, OrderBy, Row, RowStore
from medportal.application.services import ColumnCapabilities
from medportal.domain.records import HELP_REQUESTS_TABLE, HelpRequest
from medportal.domain.shared import MissingColumnError

if TYPE_CHECKING:
    from medportal.application.factories import PortalFactory

logger = logging.getLogger(__name__)

FACILITY_COLUMN = "hospital_id"


class ListHelpRequestsQuery:
    """Help requests newest first, scoped to a facility when one applies."""

    def __init__(
        self,
        row_store: RowStore,
        capabilities: ColumnCapabilities,
        actor: Callable[[], CurrentActor] | None = None,
    ):
        self._rows = row_store
        self._capabilities = capabilities
        self._actor = actor or CurrentActor.anonymous

    @classmethod
    def from_factory(cls, factory: PortalFactory) -> ListHelpRequestsQuery:
        return cls(
            row_store=factory.row_store(),
            capabilities=factory.column_capabilities(),
            actor=lambda: factory.current_actor,
        )

    async def execute(self, facility_id: str | None = None) -> list[HelpRequest]:
        """List help requests.

        Without an explicit ``facility_id`` an admin actor sees their own
        facility and everyone else sees every request.
        """
        if facility_id is None:
            actor = self._actor()
            facility_id = actor.facility_id if actor.is_admin else None

        rows = await self._fetch(facility_id)
        return [HelpRequest.from_row(row) for row in rows]

    async def _fetch(self, facility_id: str | None) -> list[Row]:
        if facility_id is None:
            return await self._select()

        if self._capabilities.supports(HELP_REQUESTS_TABLE, FACILITY_COLUMN):
            try:
                return await self._select({FACILITY_COLUMN: facility_id})
            except MissingColumnError as e:
                if e.column not in (None, FACILITY_COLUMN):
                    raise
                logger.warning(
                    "Facility filter rejected (%s), refetching unfiltered",
                    e.backend_code,
                )
                self._capabilities.mark_missing(HELP_REQUESTS_TABLE, FACILITY_COLUMN)

        rows = await self._select()
        return _filter_locally(rows, facility_id)

    async def _select(self, filters: dict[str, Any] | None = None) -> list[Row]:
        return await self._rows.select(
            HELP_REQUESTS_TABLE,
            filters=filters,
            order_by=OrderBy("created_at", descending=True),
        )


def _filter_locally(rows: list[Row], facility_id: str) -> list[Row]:
    # Rows without the column at all cannot be attributed, so all are shown
    if not any(FACILITY_COLUMN in row for row in rows):
        return rows
    return [row for row in rows if row.get(FACILITY_COLUMN) == facility_id]
