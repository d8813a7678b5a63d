"""
Feedscore Database Package.

This package contains SQLAlchemy models and session management
for the feed event store and the article rollup columns.
"""

__version__ = "0.1.0"

from .models import Base

__all__ = ["Base"]
