"""Facility reviews."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from medportal.domain.shared import ErrorCode, ValidationError, parse_timestamp

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating: int | None) -> int | None:
    if rating is None:
        return None
    if not MIN_RATING <= rating <= MAX_RATING:
        msg = f"Rating must be between {MIN_RATING} and {MAX_RATING}"
        raise ValidationError(msg, ErrorCode.INVALID_RATING)
    return rating


def _stored_rating(value: Any) -> int | None:
    # 0 and null both mean the reviewer chose "no rating"
    if not value:
        return None
    return int(value)


@dataclass(frozen=True)
class Review:
    id: str | None
    hospital_id: str
    reviewer_name: str
    rating: int | None
    content: str
    user_id: str | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        validate_rating(self.rating)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Review:
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            hospital_id=str(row.get("hospital_id") or ""),
            reviewer_name=str(row.get("reviewer_name") or ""),
            rating=_stored_rating(row.get("rating")),
            content=str(row.get("content") or ""),
            user_id=row.get("user_id"),
            created_at=parse_timestamp(row.get("created_at")),
        )

    def to_insert_row(self) -> dict[str, Any]:
        return {
            "hospital_id": self.hospital_id,
            "reviewer_name": self.reviewer_name,
            "rating": self.rating,
            "content": self.content,
            "user_id": self.user_id,
        }
