"""Facility reviews query."""

from __future__ import annotations

from typing import TYPE_CHECKING

from medportal.application.ports import OrderBy, RowStore
from medportal.domain.records import REVIEWS_TABLE, Review

if TYPE_CHECKING:
    from medportal.application.factories import PortalFactory


class ListReviewsQuery:
    """Reviews of one facility, newest first."""

    def __init__(self, row_store: RowStore):
        self._rows = row_store

    @classmethod
    def from_factory(cls, factory: PortalFactory) -> ListReviewsQuery:
        return cls(row_store=factory.row_store())

    async def execute(self, hospital_id: str) -> list[Review]:
        rows = await self._rows.select(
            REVIEWS_TABLE,
            filters={"hospital_id": hospital_id},
            order_by=OrderBy("created_at", descending=True),
        )
        return [Review.from_row(row) for row in rows]

    async def average_rating(self, hospital_id: str) -> float | None:
        """Mean of the rated reviews; unrated ones are left out."""
        ratings = [
            review.rating
            for review in await self.execute(hospital_id)
            if review.rating is not None
        ]
        if not ratings:
            return None
        return sum(ratings) / len(ratings)
