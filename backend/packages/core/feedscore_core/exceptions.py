"""Exceptions raised by the feed scoring services."""

from typing import Any


class FeedScoreError(Exception):
    """Base class for feed scoring errors."""


class InvalidFeedEventError(FeedScoreError, ValueError):
    """Raised when an event fails validation at ingestion. Nothing is stored."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class RollupWriteError(FeedScoreError):
    """
    Raised when an article rollup could not be written.

    The event log is unaffected and the recomputation can be retried.
    """

    def __init__(self, article_id: int, message: str) -> None:
        super().__init__(f"Rollup write failed for article {article_id}: {message}")
        self.article_id = article_id
