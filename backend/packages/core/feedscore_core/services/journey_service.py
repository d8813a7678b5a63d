"""
Journey attribution.

Links a reaction or comment back to the feed click that led the user to
the article, so the new interaction is recorded with the placement of
that click.
"""

from typing import assert_never

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feedscore_core import get_logger
from feedscore_core.schemas import (
    JOURNEY_ORIGIN_CATEGORIES,
    FeedContextType,
    FeedEventCategory,
    FeedEventDraft,
)
from feedscore_database.models import FeedEvent

logger = get_logger(__name__)


class JourneyAttributor:
    """Decides whether a reaction/comment continues a feed click journey."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize journey attributor.

        Args:
            session: Database session (read only).
        """
        self.session = session

    async def find_journey_origin(self, user_id: int, article_id: int) -> FeedEvent | None:
        """
        Get the user's most recent impression or click on an article.

        Identical timestamps are resolved in favour of the highest event id.

        Args:
            user_id: User identifier.
            article_id: Article identifier.

        Returns:
            The latest impression/click event, or None.
        """
        stmt = (
            select(FeedEvent)
            .where(FeedEvent.user_id == user_id)
            .where(FeedEvent.article_id == article_id)
            .where(FeedEvent.category.in_([c.value for c in JOURNEY_ORIGIN_CATEGORIES]))
            .order_by(FeedEvent.created_at.desc(), FeedEvent.id.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def attribute(
        self,
        user_id: int | None,
        article_id: int | None,
        category: FeedEventCategory,
    ) -> FeedEventDraft | None:
        """
        Build the journey event for a new interaction, if it continues a click.

        Args:
            user_id: Interacting user, required for a journey.
            article_id: Article interacted with, required for a journey.
            category: Requested interaction category.

        Returns:
            Draft of the event to append, or None when nothing should be recorded.
        """
        category = FeedEventCategory(category)
        if not category.is_journey_category:
            return None
        if user_id is None or article_id is None:
            return None

        origin = await self.find_journey_origin(user_id, article_id)
        if origin is None:
            return None

        origin_category = FeedEventCategory(origin.category)
        if origin_category is FeedEventCategory.CLICK:
            logger.debug(
                "Journey attributed to feed click",
                extra={"user_id": user_id, "article_id": article_id, "click_id": origin.id},
            )
            return FeedEventDraft(
                user_id=user_id,
                article_id=article_id,
                category=category,
                context_type=FeedContextType(origin.context_type),
                article_position=origin.article_position,
            )
        if origin_category is FeedEventCategory.IMPRESSION:
            # seen in the feed but never clicked through
            return None
        if origin_category is FeedEventCategory.REACTION or origin_category is FeedEventCategory.COMMENT:
            return None
        assert_never(origin_category)
