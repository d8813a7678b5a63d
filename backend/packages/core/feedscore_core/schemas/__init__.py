"""
Pydantic schemas for feed events, rollups and scoring configuration.
"""

from .config import ScoreWeights
from .feed_event import (
    JOURNEY_CATEGORIES,
    JOURNEY_ORIGIN_CATEGORIES,
    FeedContextType,
    FeedEventCategory,
    FeedEventCreate,
    FeedEventDraft,
)
from .rollup import BulkRecomputeResult, ItemRollup

__all__ = [
    # Config
    "ScoreWeights",
    # Feed events
    "FeedEventCategory",
    "FeedContextType",
    "FeedEventCreate",
    "FeedEventDraft",
    "JOURNEY_CATEGORIES",
    "JOURNEY_ORIGIN_CATEGORIES",
    # Rollups
    "ItemRollup",
    "BulkRecomputeResult",
]
