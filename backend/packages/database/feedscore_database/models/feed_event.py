"""FeedEvent model definition."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow


class FeedEvent(Base):
    """
    Append-only log of feed interactions.

    Rows are never updated or deleted. ``created_at`` is assigned by the
    application at insert time and, together with ``id``, orders events for
    journey lookups.
    """

    __tablename__ = "feed_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
    )
    article_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("articles.id", ondelete="CASCADE"),
    )

    category: Mapped[str] = mapped_column(String(16), nullable=False)
    context_type: Mapped[str] = mapped_column(String(16), nullable=False)
    article_position: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    user = relationship("User", back_populates="feed_events")
    article = relationship("Article", back_populates="feed_events")

    __table_args__ = (
        CheckConstraint("article_position > 0", name="ck_feed_events_article_position_positive"),
        Index("ix_feed_events_article_created", "article_id", "created_at"),
        Index("ix_feed_events_user_article_created", "user_id", "article_id", "created_at"),
    )
