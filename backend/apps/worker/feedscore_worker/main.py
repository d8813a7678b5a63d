"""
Feedscore worker entry point.

Run with ``arq feedscore_worker.main.WorkerSettings``.
"""

from typing import Any

from arq.connections import RedisSettings

from feedscore_core import get_logger, init_logging
from feedscore_core.config import settings
from feedscore_core.services import FeedCounterService
from feedscore_database.session import close_database, init_database

from .tasks import feed_counters

logger = get_logger(__name__)


async def startup(ctx: dict[str, Any]) -> None:
    """
    Worker startup handler.

    Args:
        ctx: Worker context.
    """
    init_logging(settings.log_level)
    init_database(settings.database_url)
    ctx["counter_service"] = FeedCounterService()
    logger.info("Feedscore worker started")


async def shutdown(ctx: dict[str, Any]) -> None:
    """
    Worker shutdown handler.

    Args:
        ctx: Worker context.
    """
    await close_database()
    logger.info("Feedscore worker stopped")


class WorkerSettings:
    """arq worker configuration."""

    functions = [
        feed_counters.update_feed_counters,
        feed_counters.bulk_update_feed_counters,
    ]

    on_startup = startup
    on_shutdown = shutdown

    redis_settings = RedisSettings.from_dsn(settings.redis_url)

    max_jobs = 20
    job_timeout = 300
