"""Article feed counter tasks."""

from typing import Any

from feedscore_core import get_logger
from feedscore_core.exceptions import RollupWriteError
from feedscore_core.services import FeedCounterService

logger = get_logger(__name__)


async def update_feed_counters(ctx: dict[str, Any], article_id: int) -> dict[str, Any]:
    """
    Recompute the feed counters of one article.

    Enqueued after each feed event append when counter sync is deferred.

    Args:
        ctx: Worker context.
        article_id: Article to recompute.

    Returns:
        Dictionary with the written rollup or the error.
    """
    service: FeedCounterService = ctx.get("counter_service") or FeedCounterService()

    try:
        rollup = await service.sync_item(article_id)
    except RollupWriteError as e:
        logger.exception("Feed counter update failed", extra={"article_id": article_id})
        return {"success": False, "article_id": article_id, "error": str(e)}

    if rollup is None:
        return {"success": True, "article_id": article_id}

    return {
        "success": True,
        "article_id": article_id,
        "impressions": rollup.impressions,
        "clicks": rollup.clicks,
        "success_score": rollup.success_score,
    }


async def bulk_update_feed_counters(ctx: dict[str, Any], article_ids: list[int]) -> dict[str, Any]:
    """
    Recompute feed counters for an explicit list of articles.

    Args:
        ctx: Worker context.
        article_ids: Articles to recompute.

    Returns:
        Dictionary with updated, skipped and failed article ids.
    """
    service: FeedCounterService = ctx.get("counter_service") or FeedCounterService()
    result = await service.bulk_recompute(article_ids)

    return {
        "success": result.success,
        "updated": result.updated,
        "skipped": result.skipped,
        "failed": result.failed,
    }
