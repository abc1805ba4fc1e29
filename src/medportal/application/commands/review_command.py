"""Submit a facility review."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from medportal.application.commands.access import require_authenticated
from medportal.application.ports import CurrentActor, RowStore
from medportal.domain.records import REVIEWS_TABLE, Review
from medportal.domain.shared import ValidationError

if TYPE_CHECKING:
    from medportal.application.factories import PortalFactory

logger = logging.getLogger(__name__)


class SubmitReviewCommand:
    def __init__(self, row_store: RowStore, actor: Callable[[], CurrentActor]):
        self._rows = row_store
        self._actor = actor

    @classmethod
    def from_factory(cls, factory: PortalFactory) -> SubmitReviewCommand:
        return cls(row_store=factory.row_store(), actor=lambda: factory.current_actor)

    async def execute(
        self,
        hospital_id: str,
        rating: int | None,
        content: str,
        reviewer_name: str | None = None,
    ) -> Review:
        actor = require_authenticated(self._actor())

        content = content.strip()
        if not content:
            msg = "Review content is required"
            raise ValidationError(msg)

        review = Review(
            id=None,
            hospital_id=hospital_id,
            reviewer_name=(reviewer_name or "").strip() or actor.display_label,
            rating=rating,
            content=content,
            user_id=actor.user_id,
        )
        row = await self._rows.insert(REVIEWS_TABLE, review.to_insert_row())
        logger.info("%s reviewed %s (rating %s)", actor, hospital_id, rating)
        return Review.from_row(row)
