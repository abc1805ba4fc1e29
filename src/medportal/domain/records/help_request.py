"""Help requests raised by patients and handled by facility admins."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from medportal.domain.shared import ErrorCode, ValidationError, parse_timestamp

logger = logging.getLogger(__name__)


class HelpRequestStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"
    # Stored value this client does not recognise
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> HelpRequestStatus:
        """Strict parsing for status input given to commands."""
        if value != cls.UNKNOWN.value:
            try:
                return cls(value)
            except ValueError:
                pass
        msg = f"Unknown help request status: {value}"
        raise ValidationError(msg, ErrorCode.INVALID_STATUS)

    @classmethod
    def from_stored(cls, value: str | None) -> HelpRequestStatus:
        if not value:
            return cls.PENDING
        try:
            return cls(value)
        except ValueError:
            logger.warning("Help request has unrecognised status %r", value)
            return cls.UNKNOWN


@dataclass(frozen=True)
class HelpRequest:
    id: str | None
    hospital_id: str | None
    patient_name: str
    description: str | None = None
    user_id: str | None = None
    status: HelpRequestStatus = HelpRequestStatus.PENDING
    created_at: datetime | None = None
    resolved_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> HelpRequest:
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            hospital_id=row.get("hospital_id"),
            patient_name=str(row.get("patient_name") or ""),
            description=row.get("description"),
            user_id=row.get("user_id"),
            status=HelpRequestStatus.from_stored(row.get("status")),
            created_at=parse_timestamp(row.get("created_at")),
            resolved_at=parse_timestamp(row.get("resolved_at")),
        )

    def to_insert_row(self) -> dict[str, Any]:
        return {
            "hospital_id": self.hospital_id,
            "patient_name": self.patient_name,
            "description": self.description,
            "user_id": self.user_id,
            "status": self.status.value,
        }
