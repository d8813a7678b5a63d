"""User model definition."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """
    Minimal user identity.

    The user model itself is owned elsewhere; this table only exists so that
    feed events can reference a valid user.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str | None] = mapped_column(String(100))

    feed_events = relationship("FeedEvent", back_populates="user")
