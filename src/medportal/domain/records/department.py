"""Departments and their waiting-queue load."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Load thresholds as a share of capacity
CRITICAL_LOAD = 0.8
WARNING_LOAD = 0.5


class QueueStatus(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


def queue_status(count: int, capacity: int) -> QueueStatus:
    """Classify a queue by how full it is.

    A department without capacity is critical as soon as anyone waits.
    """
    if capacity <= 0:
        return QueueStatus.CRITICAL if count > 0 else QueueStatus.GOOD
    load = count / capacity
    if load >= CRITICAL_LOAD:
        return QueueStatus.CRITICAL
    if load >= WARNING_LOAD:
        return QueueStatus.WARNING
    return QueueStatus.GOOD


@dataclass(frozen=True)
class Department:
    """A hospital department with its own waiting queue."""

    id: str
    name: str
    capacity: int = 0
    description: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Department:
        return cls(
            id=str(row["id"]),
            name=str(row.get("name") or ""),
            capacity=int(row.get("capacity") or 0),
            description=row.get("description"),
        )


@dataclass(frozen=True)
class DepartmentQueue:
    """A department together with its current number of waiting patients."""

    department: Department
    waiting: int

    @property
    def status(self) -> QueueStatus:
        return queue_status(self.waiting, self.department.capacity)

    @property
    def fill_ratio(self) -> float:
        """Share of capacity in use, capped at 1.0 for progress bars."""
        if self.department.capacity <= 0:
            return 1.0 if self.waiting else 0.0
        return min(self.waiting / self.department.capacity, 1.0)
