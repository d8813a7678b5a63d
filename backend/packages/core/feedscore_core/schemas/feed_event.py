"""
Feed event schemas.

Closed enumerations for event categories and feed contexts, and the
validated payloads used to append events to the log.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class FeedEventCategory(str, Enum):
    """Kind of interaction, in ordinal order."""

    IMPRESSION = "impression"
    CLICK = "click"
    REACTION = "reaction"
    COMMENT = "comment"

    @property
    def ordinal(self) -> int:
        """Position of the category in the enumeration (0-based)."""
        return list(FeedEventCategory).index(self)

    @property
    def is_journey_category(self) -> bool:
        """Whether interactions of this category can continue a click journey."""
        return self in JOURNEY_CATEGORIES


JOURNEY_CATEGORIES = frozenset({FeedEventCategory.REACTION, FeedEventCategory.COMMENT})

# Categories that can open (click) or fail to open (impression) a journey
JOURNEY_ORIGIN_CATEGORIES = frozenset({FeedEventCategory.IMPRESSION, FeedEventCategory.CLICK})


class FeedContextType(str, Enum):
    """Product surface where the interaction happened."""

    HOME = "home"
    SEARCH = "search"
    TAG = "tag"


class FeedEventCreate(BaseModel):
    """Validated event ingestion payload."""

    model_config = ConfigDict(frozen=True)

    user_id: StrictInt | None = None
    article_id: StrictInt | None = None
    category: FeedEventCategory
    context_type: FeedContextType
    article_position: StrictInt = Field(gt=0)


class FeedEventDraft(FeedEventCreate):
    """
    Journey event synthesized from a prior click.

    Unlike a plain ingestion payload, a draft always names both the user
    and the article.
    """

    user_id: StrictInt
    article_id: StrictInt

