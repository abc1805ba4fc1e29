"""Join a department's waiting queue."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from medportal.application.commands.access import require_authenticated
from medportal.application.ports import CurrentActor, RowStore
from medportal.domain.records import (
    DEPARTMENTS_TABLE,
    WAITING_LIST_TABLE,
    WaitingListEntry,
    WaitingStatus,
)
from medportal.domain.shared import EntityNotFoundError, ErrorCode, ValidationError

if TYPE_CHECKING:
    from medportal.application.factories import PortalFactory

logger = logging.getLogger(__name__)


class JoinQueueCommand:
    """Add a waiting-list entry for the current actor."""

    def __init__(self, row_store: RowStore, actor: Callable[[], CurrentActor]):
        self._rows = row_store
        self._actor = actor

    @classmethod
    def from_factory(cls, factory: PortalFactory) -> JoinQueueCommand:
        return cls(row_store=factory.row_store(), actor=lambda: factory.current_actor)

    async def execute(
        self,
        department_id: str,
        patient_name: str,
        reason: str | None = None,
    ) -> WaitingListEntry:
        actor = require_authenticated(self._actor())

        patient_name = patient_name.strip()
        if not patient_name:
            msg = "Patient name is required"
            raise ValidationError(msg)

        departments = await self._rows.select(
            DEPARTMENTS_TABLE,
            columns=["id"],
            filters={"id": department_id},
        )
        if not departments:
            msg = f"Department {department_id} not found"
            raise EntityNotFoundError(msg, ErrorCode.DEPARTMENT_NOT_FOUND)

        entry = WaitingListEntry(
            id=None,
            user_id=actor.user_id,
            patient_name=patient_name,
            department_id=department_id,
            reason=(reason or "").strip() or None,
            status=WaitingStatus.WAITING,
        )
        row = await self._rows.insert(WAITING_LIST_TABLE, entry.to_insert_row())
        logger.info("%s joined queue of department %s", actor, department_id)
        return WaitingListEntry.from_row(row)
