"""Help request commands - submitted by patients, handled by admins."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from medportal.application.commands.access import require_admin, require_authenticated
from medportal.application.ports import CurrentActor, RowStore
from medportal.domain.records import (
    DEFAULT_FACILITY,
    HELP_REQUESTS_TABLE,
    HelpRequest,
    HelpRequestStatus,
)
from medportal.domain.shared import EntityNotFoundError, ErrorCode, utc_now

if TYPE_CHECKING:
    from medportal.application.factories import PortalFactory

logger = logging.getLogger(__name__)


class SubmitHelpRequestCommand:
    """Raise a pending help request for a facility."""

    def __init__(self, row_store: RowStore, actor: Callable[[], CurrentActor]):
        self._rows = row_store
        self._actor = actor

    @classmethod
    def from_factory(cls, factory: PortalFactory) -> SubmitHelpRequestCommand:
        return cls(row_store=factory.row_store(), actor=lambda: factory.current_actor)

    async def execute(
        self,
        description: str | None = None,
        facility_id: str | None = None,
    ) -> HelpRequest:
        actor = require_authenticated(self._actor())
        facility_id = facility_id or actor.facility_id or DEFAULT_FACILITY.id

        request = HelpRequest(
            id=None,
            hospital_id=facility_id,
            patient_name=actor.display_label,
            description=description,
            user_id=actor.user_id,
            status=HelpRequestStatus.PENDING,
        )
        row = await self._rows.insert(HELP_REQUESTS_TABLE, request.to_insert_row())
        logger.info("Help request raised by %s for %s", actor, facility_id)
        return HelpRequest.from_row(row)


class UpdateHelpRequestStatusCommand:
    """Move a help request to a new status (admin only)."""

    def __init__(self, row_store: RowStore, actor: Callable[[], CurrentActor]):
        self._rows = row_store
        self._actor = actor

    @classmethod
    def from_factory(cls, factory: PortalFactory) -> UpdateHelpRequestStatusCommand:
        return cls(row_store=factory.row_store(), actor=lambda: factory.current_actor)

    async def execute(
        self,
        request_id: str,
        status: HelpRequestStatus | str,
    ) -> HelpRequest:
        actor = require_admin(self._actor())
        status = HelpRequestStatus.parse(status)

        values: dict[str, Any] = {"status": status.value}
        if status == HelpRequestStatus.RESOLVED:
            values["resolved_at"] = utc_now().isoformat()

        rows = await self._rows.update(HELP_REQUESTS_TABLE, values, {"id": request_id})
        if not rows:
            msg = f"Help request {request_id} not found"
            raise EntityNotFoundError(msg, ErrorCode.HELP_REQUEST_NOT_FOUND)

        logger.info("%s set help request %s to %s", actor, request_id, status.value)
        return HelpRequest.from_row(rows[0])


class DeleteHelpRequestCommand:
    """Remove a help request (admin only)."""

    def __init__(self, row_store: RowStore, actor: Callable[[], CurrentActor]):
        self._rows = row_store
        self._actor = actor

    @classmethod
    def from_factory(cls, factory: PortalFactory) -> DeleteHelpRequestCommand:
        return cls(row_store=factory.row_store(), actor=lambda: factory.current_actor)

    async def execute(self, request_id: str) -> None:
        actor = require_admin(self._actor())
        rows = await self._rows.delete(HELP_REQUESTS_TABLE, {"id": request_id})
        if not rows:
            msg = f"Help request {request_id} not found"
            raise EntityNotFoundError(msg, ErrorCode.HELP_REQUEST_NOT_FOUND)
        logger.info("%s deleted help request %s", actor, request_id)
