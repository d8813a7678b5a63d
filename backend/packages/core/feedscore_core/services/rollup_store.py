"""
Article rollup storage.

The counter service only needs two operations from storage: read every
event of an article and write the article's full counter triple. Each
unit of work gets its own store instance from a factory.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator, Callable, Sequence
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feedscore_core.exceptions import RollupWriteError
from feedscore_core.schemas import ItemRollup
from feedscore_database.models import Article, FeedEvent
from feedscore_database.session import get_session_context

from .scoring import ScoredEvent


class RollupStore(ABC):
    """Abstract storage for feed events and article rollups."""

    @abstractmethod
    async def read_events(self, article_id: int) -> Sequence[ScoredEvent]:
        """
        Read all feed events of an article.

        Args:
            article_id: Article identifier.

        Returns:
            Every event recorded for the article.
        """

    @abstractmethod
    async def write_rollup(self, article_id: int, rollup: ItemRollup) -> bool:
        """
        Write the full counter triple of an article.

        Args:
            article_id: Article identifier.
            rollup: Counters to store.

        Returns:
            True if any stored value changed.

        Raises:
            RollupWriteError: If the rollup could not be written.
        """


RollupStoreFactory = Callable[[], AbstractAsyncContextManager[RollupStore]]


class SQLAlchemyRollupStore(RollupStore):
    """
    Rollup store backed by the ``articles`` and ``feed_events`` tables.

    The article row is locked (``SELECT ... FOR UPDATE``) before its events
    are read, so concurrent recomputations of one article serialize while
    different articles proceed independently.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _lock_article(self, article_id: int) -> Article:
        stmt = (
            select(Article)
            .where(Article.id == article_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        article = result.scalar_one_or_none()
        if article is None:
            raise RollupWriteError(article_id, "article not found")
        return article

    async def read_events(self, article_id: int) -> Sequence[FeedEvent]:
        await self._lock_article(article_id)
        result = await self.session.execute(select(FeedEvent).where(FeedEvent.article_id == article_id))
        return result.scalars().all()

    async def write_rollup(self, article_id: int, rollup: ItemRollup) -> bool:
        article = await self._lock_article(article_id)

        current = (article.feed_impressions_count, article.feed_clicks_count, article.feed_success_score)
        target = (rollup.impressions, rollup.clicks, rollup.success_score)
        if current == target:
            return False

        article.feed_impressions_count = rollup.impressions
        article.feed_clicks_count = rollup.clicks
        article.feed_success_score = rollup.success_score
        await self.session.flush()
        return True


@asynccontextmanager
async def sqlalchemy_rollup_store() -> AsyncGenerator[SQLAlchemyRollupStore, None]:
    """
    Open a session-scoped store; commit on success, roll back on error.

    Nothing written through the store is visible until the whole unit of
    work commits.
    """
    async with get_session_context() as session:
        try:
            yield SQLAlchemyRollupStore(session)
            await session.commit()
        except BaseException:
            await session.rollback()
            raise
