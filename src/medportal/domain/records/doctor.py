"""Doctors and their availability."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

UNKNOWN_DEPARTMENT = "Unknown"


@dataclass(frozen=True)
class Doctor:
    id: str
    name: str
    specialization: str
    department_id: str | None = None
    available: bool = False
    department_name: str = UNKNOWN_DEPARTMENT

    @classmethod
    def from_row(
        cls,
        row: dict[str, Any],
        department_names: dict[str, str] | None = None,
    ) -> Doctor:
        department_id = row.get("department_id")
        department_id = str(department_id) if department_id is not None else None
        names = department_names or {}
        return cls(
            id=str(row["id"]),
            name=str(row.get("name") or ""),
            specialization=str(row.get("specialization") or ""),
            department_id=department_id,
            available=bool(row.get("available")),
            department_name=names.get(department_id or "", UNKNOWN_DEPARTMENT),
        )

    def matches(self, department_id: str | None = None, search: str = "") -> bool:
        """Department filter plus case-insensitive name/specialization search."""
        if department_id is not None and self.department_id != department_id:
            return False
        term = search.strip().lower()
        if not term:
            return True
        return term in self.name.lower() or term in self.specialization.lower()
