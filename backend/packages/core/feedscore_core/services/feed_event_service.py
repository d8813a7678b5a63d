"""
Feed event service.

Validates and appends feed events, and explicitly triggers the article
counter sync for every appended event that belongs to an article.
"""

from typing import Literal

from arq.connections import ArqRedis
from pydantic import ValidationError
from redis.exceptions import RedisError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedscore_core import get_logger
from feedscore_core.config import settings
from feedscore_core.exceptions import InvalidFeedEventError, RollupWriteError
from feedscore_core.schemas import FeedContextType, FeedEventCategory, FeedEventCreate
from feedscore_database.models import FeedEvent

from .counter_service import FeedCounterService
from .journey_service import JourneyAttributor

logger = get_logger(__name__)

# arq function name registered by the worker
UPDATE_FEED_COUNTERS_JOB = "update_feed_counters"


class FeedEventService:
    """Append-only feed event log with counter sync on write."""

    def __init__(
        self,
        session: AsyncSession,
        counter_service: FeedCounterService | None = None,
        redis: ArqRedis | None = None,
        sync_mode: Literal["inline", "deferred"] | None = None,
    ) -> None:
        """
        Initialize feed event service.

        Args:
            session: Database session used for appends and reads.
            counter_service: Counter synchronizer for inline sync.
            redis: arq pool, required in deferred mode.
            sync_mode: "inline" or "deferred", defaults to settings.

        Raises:
            ValueError: If deferred mode is requested without a Redis pool.
        """
        self.session = session
        self.counter_service = counter_service or FeedCounterService()
        self.redis = redis
        self.sync_mode = sync_mode or settings.counter_sync_mode

        if self.sync_mode == "deferred" and self.redis is None:
            raise ValueError("Redis pool required for deferred counter sync")

    async def record_event(
        self,
        user_id: int | None,
        article_id: int | None,
        category: FeedEventCategory | str,
        context_type: FeedContextType | str,
        position: int,
    ) -> int:
        """
        Validate and append a feed event.

        Args:
            user_id: Interacting user, None for anonymous interactions.
            article_id: Article interacted with, None if not attributable.
            category: Interaction category.
            context_type: Feed context the article was shown in.
            position: 1-based position of the article in that context.

        Returns:
            ID of the stored event.

        Raises:
            InvalidFeedEventError: If validation fails; nothing is stored.
            RollupWriteError: If the event was stored but the counter sync failed.
        """
        try:
            payload = FeedEventCreate(
                user_id=user_id,
                article_id=article_id,
                category=category,
                context_type=context_type,
                article_position=position,
            )
        except ValidationError as e:
            raise InvalidFeedEventError("Invalid feed event", errors=e.errors()) from e

        return await self.append(payload)

    async def record_journey(
        self,
        user_id: int | None,
        article_id: int | None,
        category: FeedEventCategory | str,
    ) -> int | None:
        """
        Record a reaction/comment as part of a feed click journey.

        Args:
            user_id: Interacting user.
            article_id: Article interacted with.
            category: Interaction category; only reaction and comment qualify.

        Returns:
            ID of the stored journey event, or None if the interaction did not
            follow a feed click on this article.

        Raises:
            InvalidFeedEventError: If the category is unknown.
        """
        try:
            category = FeedEventCategory(category)
        except ValueError as e:
            raise InvalidFeedEventError(f"Unknown feed event category: {category}") from e

        draft = await JourneyAttributor(self.session).attribute(user_id, article_id, category)
        if draft is None:
            return None
        return await self.append(draft)

    async def append(self, payload: FeedEventCreate) -> int:
        """
        Append a validated event, then sync its article counters.

        The event is committed before the sync runs, so a sync failure never
        loses the event.

        Args:
            payload: Validated event.

        Returns:
            ID of the stored event.

        Raises:
            InvalidFeedEventError: If the user or article does not exist.
        """
        event = FeedEvent(
            user_id=payload.user_id,
            article_id=payload.article_id,
            category=payload.category.value,
            context_type=payload.context_type.value,
            article_position=payload.article_position,
        )
        self.session.add(event)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise InvalidFeedEventError(
                "Feed event references an unknown user or article",
                errors=[{"user_id": payload.user_id, "article_id": payload.article_id, "detail": str(e.orig)}],
            ) from e
        event_id = event.id

        try:
            await self._sync_counters(payload.article_id)
        except (RollupWriteError, RedisError, OSError):
            logger.exception(
                "Feed counter sync failed after append",
                extra={"event_id": event_id, "article_id": payload.article_id},
            )
            raise

        return event_id

    async def _sync_counters(self, article_id: int | None) -> None:
        if article_id is None:
            return

        if self.sync_mode == "deferred" and self.redis is not None:
            await self.redis.enqueue_job(UPDATE_FEED_COUNTERS_JOB, article_id)
            return

        await self.counter_service.sync_item(article_id)

    async def list_for_article(self, article_id: int) -> list[FeedEvent]:
        """
        List an article's feed events, oldest first.

        Args:
            article_id: Article identifier.

        Returns:
            Events ordered by creation time, then id.
        """
        stmt = (
            select(FeedEvent)
            .where(FeedEvent.article_id == article_id)
            .order_by(FeedEvent.created_at, FeedEvent.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
