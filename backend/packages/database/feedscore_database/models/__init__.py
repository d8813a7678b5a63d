"""
Database models package.

This module exports all SQLAlchemy models for the feedscore application.
"""

from .article import Article
from .base import Base, TimestampMixin
from .feed_event import FeedEvent
from .user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "Article",
    "FeedEvent",
]
