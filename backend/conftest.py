"""Global pytest fixtures for testing."""

import asyncio
import contextlib
import os
from collections import defaultdict
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import dotenv
import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import NullPool

from feedscore_core.exceptions import RollupWriteError
from feedscore_core.schemas import ItemRollup
from feedscore_core.services.rollup_store import RollupStore
from feedscore_database import Base
from feedscore_database.models import Article, User
from feedscore_database.session import close_database, get_session_factory, init_database

with contextlib.suppress(OSError):
    dotenv.load_dotenv()


class MockArqRedis:
    """Mock ArqRedis for testing."""

    def __init__(self):
        self.enqueued_jobs: list[tuple[str, tuple[Any, ...]]] = []

    async def enqueue_job(self, func_name: str, *args: Any, **kwargs: Any) -> None:
        """Mock enqueue_job that records calls without actually queuing."""
        self.enqueued_jobs.append((func_name, args))

    def reset(self) -> None:
        """Reset recorded jobs."""
        self.enqueued_jobs.clear()


class InMemoryRollupStore(RollupStore):
    """Dict-backed rollup store that records concurrency and writes."""

    def __init__(self):
        self.events: dict[int, list[SimpleNamespace]] = defaultdict(list)
        self.rollups: dict[int, ItemRollup] = {}
        self.writes: list[int] = []
        self.failing: set[int] = set()
        self.active = 0
        self.max_active = 0

    def add_events(self, article_id: int, category: str, user_id: int | None, count: int = 1) -> None:
        for _ in range(count):
            self.events[article_id].append(SimpleNamespace(user_id=user_id, category=category))

    async def read_events(self, article_id: int) -> list[SimpleNamespace]:
        return list(self.events[article_id])

    async def write_rollup(self, article_id: int, rollup: ItemRollup) -> bool:
        if article_id in self.failing:
            raise RollupWriteError(article_id, "store unavailable")
        self.writes.append(article_id)
        changed = self.rollups.get(article_id) != rollup
        self.rollups[article_id] = rollup
        return changed

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncGenerator["InMemoryRollupStore", None]:
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(0)
            yield self
        finally:
            self.active -= 1


@pytest.fixture
def test_database_url(tmp_path: Path) -> str:
    """Database URL for a throwaway test database."""
    url = os.getenv("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'feedscore_test.db'}"

    # Safety check: ensure tests only run on a test database
    if "_test" not in url and "/test" not in url:
        raise RuntimeError(
            f"Safety check failed: TEST_DATABASE_URL must point to a test database "
            f"(name should contain 'test'). Current: {url}"
        )
    return url


@pytest_asyncio.fixture
async def test_engine(test_database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine and schema."""
    engine = init_database(test_database_url, echo=False, poolclass=NullPool)

    if engine.dialect.name == "sqlite":
        # Enforce foreign keys like PostgreSQL does
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await close_database()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with get_session_factory()() as session:
        yield session


@pytest_asyncio.fixture
async def users(db_session: AsyncSession) -> list[User]:
    """Create two test users."""
    created = [User(username="reader_one"), User(username="reader_two")]
    db_session.add_all(created)
    await db_session.commit()
    return created


@pytest_asyncio.fixture
async def articles(db_session: AsyncSession) -> list[Article]:
    """Create three test articles with zeroed feed counters."""
    created = [Article(title=f"Article {i}") for i in range(1, 4)]
    db_session.add_all(created)
    await db_session.commit()
    return created


@pytest.fixture
def mock_redis() -> MockArqRedis:
    """Provide a fresh mock arq pool."""
    return MockArqRedis()


@pytest.fixture
def memory_store() -> InMemoryRollupStore:
    """Provide an in-memory rollup store."""
    return InMemoryRollupStore()
