"""
Feed success score calculation.

Pure functions mapping the feed events of one article to its rollup.
Nothing here touches the database, so the same event set always yields
the same rollup regardless of event order.
"""

from collections.abc import Iterable
from typing import Protocol, assert_never

from feedscore_core.schemas import FeedEventCategory, ItemRollup, ScoreWeights


class ScoredEvent(Protocol):
    """Minimal event shape needed for scoring (ORM rows and schemas both fit)."""

    @property
    def user_id(self) -> int | None: ...

    @property
    def category(self) -> str: ...


def success_score(
    impressing_users: int,
    reacting_users: int,
    commenting_users: int,
    weights: ScoreWeights,
) -> float:
    """
    Compute the distinct-user weighted success score.

    The base term of 1 is counted once per article as soon as at least one
    distinct user saw it; reactions and comments add their weight per
    distinct user. The sum is normalized by the number of impressing users.

    Args:
        impressing_users: Distinct users with at least one impression.
        reacting_users: Distinct users with at least one reaction.
        commenting_users: Distinct users with at least one comment.
        weights: Reaction and comment multipliers.

    Returns:
        The score, or 0.0 when nobody has seen the article yet.
    """
    if impressing_users <= 0:
        return 0.0

    weighted = (
        1
        + reacting_users * weights.reaction_multiplier
        + commenting_users * weights.comment_multiplier
    )
    return weighted / float(impressing_users)


def compute_rollup(events: Iterable[ScoredEvent], weights: ScoreWeights) -> ItemRollup:
    """
    Aggregate one article's events into its counter triple.

    Impression and click totals are raw counts, duplicates and anonymous
    events included. Score components count distinct known users only.

    Args:
        events: All feed events of a single article.
        weights: Reaction and comment multipliers.

    Returns:
        The article rollup.
    """
    impressions = 0
    clicks = 0
    impressing_users: set[int] = set()
    reacting_users: set[int] = set()
    commenting_users: set[int] = set()

    for event in events:
        category = FeedEventCategory(event.category)
        user_id = event.user_id

        if category is FeedEventCategory.IMPRESSION:
            impressions += 1
            if user_id is not None:
                impressing_users.add(user_id)
        elif category is FeedEventCategory.CLICK:
            clicks += 1
        elif category is FeedEventCategory.REACTION:
            if user_id is not None:
                reacting_users.add(user_id)
        elif category is FeedEventCategory.COMMENT:
            if user_id is not None:
                commenting_users.add(user_id)
        else:
            assert_never(category)

    return ItemRollup(
        impressions=impressions,
        clicks=clicks,
        success_score=success_score(
            len(impressing_users), len(reacting_users), len(commenting_users), weights
        ),
    )
