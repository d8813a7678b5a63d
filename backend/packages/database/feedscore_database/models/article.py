"""
Article model definition.

This module defines the content item and its feed rollup columns.
"""

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class Article(Base, TimestampMixin):
    """
    Content item shown in the feed.

    Only the rollup columns are written by this package. They are derived
    data: every value can be recomputed from the article's feed events.

    Attributes:
        id: Article identifier.
        title: Article title.
        feed_impressions_count: Raw number of impression events.
        feed_clicks_count: Raw number of click events.
        feed_success_score: Distinct-user weighted engagement score.
    """

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str | None] = mapped_column(String(500))

    # Feed rollup
    feed_impressions_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    feed_clicks_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    feed_success_score: Mapped[float] = mapped_column(Float, default=0.0, server_default="0", nullable=False)

    feed_events = relationship("FeedEvent", back_populates="article")
