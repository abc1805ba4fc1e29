"""Blood-bank inventory."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

CRITICAL_UNITS = 5
LOW_UNITS = 10


class StockStatus(str, Enum):
    GOOD = "good"
    LOW = "low"
    CRITICAL = "critical"


@dataclass(frozen=True)
class BloodStock:
    """Units available for one blood type."""

    id: str | None
    blood_type: str
    units: int

    @property
    def stock_status(self) -> StockStatus:
        if self.units < CRITICAL_UNITS:
            return StockStatus.CRITICAL
        if self.units < LOW_UNITS:
            return StockStatus.LOW
        return StockStatus.GOOD

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> BloodStock:
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            blood_type=str(row.get("blood_type") or ""),
            units=int(row.get("units") or 0),
        )
