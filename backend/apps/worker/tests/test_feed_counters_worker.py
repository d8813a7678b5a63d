"""Tests for feed counter worker tasks."""

from unittest.mock import AsyncMock, patch

import pytest

from feedscore_core.exceptions import RollupWriteError
from feedscore_core.schemas import BulkRecomputeResult, ItemRollup
from feedscore_worker.main import WorkerSettings
from feedscore_worker.tasks.feed_counters import bulk_update_feed_counters, update_feed_counters


def test_worker_registers_feed_counter_tasks() -> None:
    """Both counter tasks are registered under their function names."""
    names = {func.__name__ for func in WorkerSettings.functions}
    assert names == {"update_feed_counters", "bulk_update_feed_counters"}


@pytest.mark.asyncio
async def test_update_feed_counters_returns_rollup() -> None:
    """Single article task reports the written counters."""
    service = AsyncMock()
    service.sync_item.return_value = ItemRollup(impressions=3, clicks=1, success_score=8.0)

    result = await update_feed_counters({"counter_service": service}, 42)

    service.sync_item.assert_awaited_once_with(42)
    assert result == {
        "success": True,
        "article_id": 42,
        "impressions": 3,
        "clicks": 1,
        "success_score": 8.0,
    }


@pytest.mark.asyncio
async def test_update_feed_counters_reports_write_failure() -> None:
    """Write failures are reported instead of crashing the worker."""
    service = AsyncMock()
    service.sync_item.side_effect = RollupWriteError(42, "store unavailable")

    result = await update_feed_counters({"counter_service": service}, 42)

    assert result["success"] is False
    assert "store unavailable" in result["error"]


@pytest.mark.asyncio
async def test_update_feed_counters_builds_default_service() -> None:
    """Without a service in the context the task builds one."""
    with patch("feedscore_worker.tasks.feed_counters.FeedCounterService") as service_cls:
        service_cls.return_value.sync_item = AsyncMock(return_value=None)

        result = await update_feed_counters({}, 7)

    service_cls.assert_called_once_with()
    assert result == {"success": True, "article_id": 7}


@pytest.mark.asyncio
async def test_bulk_update_feed_counters_delegates() -> None:
    """Bulk task returns the recompute outcome."""
    service = AsyncMock()
    service.bulk_recompute.return_value = BulkRecomputeResult(updated=[1], skipped=[2], failed={3: "boom"})

    result = await bulk_update_feed_counters({"counter_service": service}, [1, 2, 3])

    service.bulk_recompute.assert_awaited_once_with([1, 2, 3])
    assert result == {"success": False, "updated": [1], "skipped": [2], "failed": {3: "boom"}}
