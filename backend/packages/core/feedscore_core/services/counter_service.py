"""
Article feed counter synchronization.

Recomputes article rollups from the event log, either for one article
after an event is appended or for an explicit list of articles.
"""

import asyncio
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError

from feedscore_core import get_logger
from feedscore_core.config import settings
from feedscore_core.exceptions import RollupWriteError
from feedscore_core.schemas import BulkRecomputeResult, ItemRollup, ScoreWeights

from .rollup_store import RollupStoreFactory, sqlalchemy_rollup_store
from .scoring import compute_rollup

logger = get_logger(__name__)


class FeedCounterService:
    """Service keeping article feed counters in sync with feed events."""

    def __init__(
        self,
        store_factory: RollupStoreFactory | None = None,
        weights: ScoreWeights | None = None,
        bulk_concurrency: int | None = None,
    ) -> None:
        """
        Initialize feed counter service.

        Args:
            store_factory: Factory opening one rollup store per unit of work.
            weights: Score weights, defaults to configured multipliers.
            bulk_concurrency: Max articles recomputed at once in bulk mode.
        """
        self._store_factory = store_factory or sqlalchemy_rollup_store
        self.weights = weights or settings.score_weights()
        self.bulk_concurrency = bulk_concurrency or settings.bulk_concurrency

    async def _recompute(self, article_id: int, *, skip_without_impressions: bool) -> ItemRollup | None:
        try:
            async with self._store_factory() as store:
                events = await store.read_events(article_id)
                rollup = compute_rollup(events, self.weights)
                if skip_without_impressions and rollup.impressions == 0:
                    return None
                changed = await store.write_rollup(article_id, rollup)
        except RollupWriteError:
            raise
        except (SQLAlchemyError, OSError) as e:
            raise RollupWriteError(article_id, str(e)) from e

        logger.debug(
            "Article feed counters recomputed",
            extra={
                "article_id": article_id,
                "impressions": rollup.impressions,
                "clicks": rollup.clicks,
                "success_score": rollup.success_score,
                "changed": changed,
            },
        )
        return rollup

    async def sync_item(self, article_id: int | None) -> ItemRollup | None:
        """
        Recompute and write the counters of a single article.

        Args:
            article_id: Article of the event that was just appended.

        Returns:
            The written rollup, or None when the event had no article.

        Raises:
            RollupWriteError: If the rollup could not be written.
        """
        if article_id is None:
            return None
        return await self._recompute(article_id, skip_without_impressions=False)

    async def bulk_recompute(self, article_ids: Iterable[int]) -> BulkRecomputeResult:
        """
        Recompute counters for many articles independently.

        Articles without any impression are skipped and keep their stored
        counters. A failing article does not stop the others.

        Args:
            article_ids: Articles to recompute; duplicates are processed once.

        Returns:
            Updated, skipped and failed article ids, in input order.
        """
        unique_ids = list(dict.fromkeys(article_ids))
        if not unique_ids:
            return BulkRecomputeResult()

        semaphore = asyncio.Semaphore(self.bulk_concurrency)
        outcomes: dict[int, ItemRollup | None] = {}
        errors: dict[int, str] = {}

        async def run(article_id: int) -> None:
            async with semaphore:
                try:
                    outcomes[article_id] = await self._recompute(article_id, skip_without_impressions=True)
                except RollupWriteError as e:
                    logger.exception("Article feed counter recompute failed", extra={"article_id": article_id})
                    errors[article_id] = str(e)

        await asyncio.gather(*(run(article_id) for article_id in unique_ids))

        result = BulkRecomputeResult(
            updated=[i for i in unique_ids if outcomes.get(i) is not None],
            skipped=[i for i in unique_ids if i in outcomes and outcomes[i] is None],
            failed={i: errors[i] for i in unique_ids if i in errors},
        )
        logger.info(
            "Bulk feed counter recompute completed",
            extra={
                "requested": len(unique_ids),
                "updated": len(result.updated),
                "skipped": len(result.skipped),
                "failed": len(result.failed),
            },
        )
        return result
