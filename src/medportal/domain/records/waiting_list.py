"""Waiting-list entries (patients queued for a department)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from medportal.domain.shared import ErrorCode, ValidationError, parse_timestamp

logger = logging.getLogger(__name__)


class WaitingStatus(str, Enum):
    WAITING = "waiting"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> WaitingStatus:
        if value != cls.UNKNOWN.value:
            try:
                return cls(value)
            except ValueError:
                pass
        msg = f"Unknown waiting-list status: {value}"
        raise ValidationError(msg, ErrorCode.INVALID_STATUS)

    @classmethod
    def from_stored(cls, value: str | None) -> WaitingStatus:
        """Tolerant parsing for rows; unrecognised values become UNKNOWN."""
        if not value:
            return cls.WAITING
        try:
            return cls(value)
        except ValueError:
            logger.warning("Waiting-list entry has unrecognised status %r", value)
            return cls.UNKNOWN


@dataclass(frozen=True)
class WaitingListEntry:
    id: str | None
    user_id: str | None
    patient_name: str
    department_id: str
    reason: str | None = None
    status: WaitingStatus = WaitingStatus.WAITING
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> WaitingListEntry:
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            user_id=row.get("user_id"),
            patient_name=str(row.get("patient_name") or ""),
            department_id=str(row.get("department_id")),
            reason=row.get("reason"),
            status=WaitingStatus.from_stored(row.get("status")),
            created_at=parse_timestamp(row.get("created_at")),
        )

    def to_insert_row(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "patient_name": self.patient_name,
            "department_id": self.department_id,
            "reason": self.reason,
            "status": self.status.value,
        }
