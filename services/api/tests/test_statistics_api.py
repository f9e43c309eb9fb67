"""Tests for the statistics HTTP endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from streamstats.schemas import LivestreamStatistics, UserStatistics
from streamstats.services import aggregates
from streamstats.services import statistics as statistics_service
from streamstats.services.session import UserSession

SESSION_HEADERS = {"Cookie": "isupipe_session=sid"}


@pytest.fixture
def signed_in(monkeypatch: pytest.MonkeyPatch) -> None:
    """Accept any session cookie without touching Redis."""
    from streamstats.routes import statistics as statistics_routes

    async def fake_verify_user_session(session_id: str | None) -> UserSession:
        return UserSession(session_id=session_id or "", user_id=1, username="alice", expires=0)

    monkeypatch.setattr(statistics_routes, "verify_user_session", fake_verify_user_session)


@pytest.mark.asyncio
async def test_user_statistics_endpoint(client: AsyncClient, signed_in, monkeypatch: pytest.MonkeyPatch):
    """Test user statistics endpoint returns the service result as JSON."""
    from streamstats.routes import statistics as statistics_routes

    async def fake_get_user_statistics(username: str) -> UserStatistics:
        assert username == "alice"
        return UserStatistics(
            rank=3,
            viewers_count=10,
            total_reactions=4,
            total_livecomments=2,
            total_tip=500,
            favorite_emoji="tada",
        )

    monkeypatch.setattr(statistics_routes, "get_user_statistics", fake_get_user_statistics)

    response = await client.get("/api/user/alice/statistics", headers=SESSION_HEADERS)
    assert response.status_code == 200
    assert response.json() == {
        "rank": 3,
        "viewers_count": 10,
        "total_reactions": 4,
        "total_livecomments": 2,
        "total_tip": 500,
        "favorite_emoji": "tada",
    }


@pytest.mark.asyncio
async def test_livestream_statistics_endpoint(client: AsyncClient, signed_in, monkeypatch: pytest.MonkeyPatch):
    """Test livestream statistics endpoint parses the id and returns JSON."""
    from streamstats.routes import statistics as statistics_routes

    async def fake_get_livestream_statistics(livestream_id: int) -> LivestreamStatistics:
        assert livestream_id == 42
        return LivestreamStatistics(
            rank=1,
            viewers_count=2,
            total_reactions=5,
            total_reports=0,
            max_tip=1000,
        )

    monkeypatch.setattr(statistics_routes, "get_livestream_statistics", fake_get_livestream_statistics)

    response = await client.get("/api/livestream/42/statistics", headers=SESSION_HEADERS)
    assert response.status_code == 200
    assert response.json()["max_tip"] == 1000
    assert response.json()["rank"] == 1


@pytest.mark.asyncio
async def test_livestream_statistics_rejects_non_integer_id(client: AsyncClient, signed_in):
    response = await client.get("/api/livestream/abc/statistics", headers=SESSION_HEADERS)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_LIVESTREAM_ID"


@pytest.mark.asyncio
async def test_unknown_user_returns_client_error_only(client: AsyncClient, signed_in, store):
    """Unknown user: 400 with the error envelope and no statistics fields."""
    await store.user("alice")

    response = await client.get("/api/user/nobody/statistics", headers=SESSION_HEADERS)
    assert response.status_code == 400
    data = response.json()
    assert set(data) == {"error"}
    assert data["error"]["code"] == "USER_NOT_FOUND"
    assert data["error"]["message"] == "not found user that has the given username"


@pytest.mark.asyncio
async def test_overlong_username_is_not_found(client: AsyncClient, signed_in, store):
    """A name longer than any stored one still gets the not-found envelope."""
    await store.user("alice")

    response = await client.get(f"/api/user/{'x' * 256}/statistics", headers=SESSION_HEADERS)
    assert response.status_code == 400
    data = response.json()
    assert set(data) == {"error"}
    assert data["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_livestream_id_above_int32_is_not_found(client: AsyncClient, signed_in, store):
    owner = await store.user("owner")
    await store.livestream(owner)

    response = await client.get("/api/livestream/3000000000/statistics", headers=SESSION_HEADERS)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "LIVESTREAM_NOT_FOUND"


@pytest.mark.asyncio
async def test_livestream_statistics_end_to_end(client: AsyncClient, signed_in, store):
    owner = await store.user("owner")
    ls = await store.livestream(owner)
    for tip in (0, 1000, 50):
        await store.livecomment(ls, tip=tip, user_id=owner)

    response = await client.get(f"/api/livestream/{ls}/statistics", headers=SESSION_HEADERS)
    assert response.status_code == 200
    assert response.json() == {
        "rank": 1,
        "viewers_count": 0,
        "total_reactions": 0,
        "total_reports": 0,
        "max_tip": 1000,
    }


@pytest.mark.asyncio
async def test_user_store_failure_renders_500(
    client: AsyncClient, signed_in, store, monkeypatch: pytest.MonkeyPatch
):
    await store.user("alice")

    async def broken_rank(session, username, strategy=None):
        raise OperationalError("SELECT ...", {}, Exception("connection reset"))

    monkeypatch.setattr(statistics_service, "compute_user_rank", broken_rank)

    response = await client.get("/api/user/alice/statistics", headers=SESSION_HEADERS)
    assert response.status_code == 500
    data = response.json()
    assert set(data) == {"error"}
    assert data["error"]["code"] == "STORE_FAILURE"
    assert data["error"]["message"].startswith("failed to get rank:")


@pytest.mark.asyncio
async def test_livestream_store_failure_renders_500(
    client: AsyncClient, signed_in, store, monkeypatch: pytest.MonkeyPatch
):
    owner = await store.user("owner")
    ls = await store.livestream(owner)

    async def broken_max_tip(session, livestream_id):
        raise OperationalError("SELECT ...", {}, Exception("disk I/O error"))

    monkeypatch.setattr(aggregates, "max_livestream_tip", broken_max_tip)

    response = await client.get(f"/api/livestream/{ls}/statistics", headers=SESSION_HEADERS)
    assert response.status_code == 500
    data = response.json()
    assert set(data) == {"error"}
    assert data["error"]["code"] == "STORE_FAILURE"
    assert data["error"]["message"].startswith("failed to find maximum tip livecomment:")
    assert "disk I/O error" in data["error"]["message"]


@pytest.mark.asyncio
async def test_statistics_require_session(client: AsyncClient):
    """Without a session cookie the request is rejected before any statistics work."""
    response = await client.get("/api/user/alice/statistics")
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "SESSION_INVALID"
