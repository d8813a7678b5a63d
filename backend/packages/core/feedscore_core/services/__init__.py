"""
Service layer.

Feed event logging, journey attribution, scoring and counter sync.
"""

from .counter_service import FeedCounterService
from .feed_event_service import FeedEventService
from .journey_service import JourneyAttributor
from .rollup_store import RollupStore, SQLAlchemyRollupStore, sqlalchemy_rollup_store
from .scoring import compute_rollup, success_score

__all__ = [
    "FeedEventService",
    "FeedCounterService",
    "JourneyAttributor",
    "RollupStore",
    "SQLAlchemyRollupStore",
    "sqlalchemy_rollup_store",
    "compute_rollup",
    "success_score",
]
