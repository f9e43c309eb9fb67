"""Shared fixtures.

Statistics queries run against a throwaway SQLite file (aiosqlite) so tests
never touch a real Postgres. SQLite only offers SERIALIZABLE, so snapshots
are pinned to that level here.
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from streamstats.main import app
from streamstats.models import (
    Livecomment,
    LivecommentReport,
    Livestream,
    LivestreamViewerHistory,
    Reaction,
    User,
)
from streamstats.settings import get_settings
from streamstats.stores.postgres import close_db, create_tables, get_session, init_db


@pytest.fixture
async def client():
    """Create test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def db(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Initialize an empty SQLite database with all tables."""
    monkeypatch.setenv("SNAPSHOT_ISOLATION_LEVEL", "SERIALIZABLE")
    get_settings.cache_clear()

    await init_db(f"sqlite+aiosqlite:///{tmp_path / 'stats.db'}")
    await create_tables()
    yield
    await close_db()
    get_settings.cache_clear()


class StoreBuilder:
    """Insert users, livestreams and activity rows for a test."""

    def __init__(self) -> None:
        self._start = datetime(2026, 1, 1, tzinfo=timezone.utc)

    async def user(self, name: str) -> int:
        async with get_session() as session:
            user = User(name=name, display_name=name.title(), description="", password="")
            session.add(user)
            await session.flush()
            return user.id

    async def livestream(self, owner_id: int, livestream_id: int | None = None) -> int:
        async with get_session() as session:
            livestream = Livestream(
                user_id=owner_id,
                title="stream",
                description="",
                playlist_url="",
                thumbnail_url="",
                start_at=self._start,
                end_at=self._start + timedelta(hours=1),
            )
            if livestream_id is not None:
                livestream.id = livestream_id
            session.add(livestream)
            await session.flush()
            return livestream.id

    async def reactions(self, livestream_id: int, emoji_name: str, count: int = 1, user_id: int = 1) -> None:
        async with get_session() as session:
            session.add_all(
                Reaction(user_id=user_id, livestream_id=livestream_id, emoji_name=emoji_name)
                for _ in range(count)
            )

    async def livecomment(self, livestream_id: int, tip: int = 0, user_id: int = 1) -> int:
        async with get_session() as session:
            comment = Livecomment(user_id=user_id, livestream_id=livestream_id, comment="hi", tip=tip)
            session.add(comment)
            await session.flush()
            return comment.id

    async def report(self, livestream_id: int, livecomment_id: int, user_id: int = 1) -> None:
        async with get_session() as session:
            session.add(
                LivecommentReport(
                    user_id=user_id,
                    livestream_id=livestream_id,
                    livecomment_id=livecomment_id,
                )
            )

    async def viewers(self, livestream_id: int, count: int = 1, user_id: int = 1) -> None:
        async with get_session() as session:
            session.add_all(
                LivestreamViewerHistory(user_id=user_id, livestream_id=livestream_id)
                for _ in range(count)
            )


@pytest.fixture
async def store(db) -> StoreBuilder:
    """Row builder bound to the test database."""
    return StoreBuilder()
