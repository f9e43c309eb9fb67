"""Tests for session verification."""

import pytest

from streamstats.services import session as session_service
from streamstats.services.errors import SessionError
from streamstats.services.session import verify_user_session

NOW = 1_700_000_000


def _patch_store(monkeypatch: pytest.MonkeyPatch, payload: dict | None) -> None:
    async def fake_get_session_data(session_id: str) -> dict | None:
        return payload

    monkeypatch.setattr(session_service, "get_session_data", fake_get_session_data)


@pytest.mark.asyncio
async def test_valid_session(monkeypatch: pytest.MonkeyPatch):
    _patch_store(monkeypatch, {"user_id": 7, "username": "alice", "expires": NOW + 60})

    verified = await verify_user_session("sid", now=NOW)

    assert verified.user_id == 7
    assert verified.username == "alice"
    assert verified.session_id == "sid"


@pytest.mark.asyncio
async def test_missing_cookie_is_forbidden():
    with pytest.raises(SessionError) as exc_info:
        await verify_user_session(None, now=NOW)
    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_unknown_session_is_forbidden(monkeypatch: pytest.MonkeyPatch):
    _patch_store(monkeypatch, None)

    with pytest.raises(SessionError) as exc_info:
        await verify_user_session("sid", now=NOW)
    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_session_without_expiry_is_forbidden(monkeypatch: pytest.MonkeyPatch):
    _patch_store(monkeypatch, {"user_id": 7})

    with pytest.raises(SessionError) as exc_info:
        await verify_user_session("sid", now=NOW)
    assert exc_info.value.status_code == 403
    assert "EXPIRES" in exc_info.value.message


@pytest.mark.asyncio
async def test_session_without_user_is_unauthorized(monkeypatch: pytest.MonkeyPatch):
    _patch_store(monkeypatch, {"expires": NOW + 60})

    with pytest.raises(SessionError) as exc_info:
        await verify_user_session("sid", now=NOW)
    assert exc_info.value.status_code == 401
    assert "USERID" in exc_info.value.message


@pytest.mark.asyncio
async def test_expired_session_is_unauthorized(monkeypatch: pytest.MonkeyPatch):
    _patch_store(monkeypatch, {"user_id": 7, "expires": NOW - 1})

    with pytest.raises(SessionError) as exc_info:
        await verify_user_session("sid", now=NOW)
    assert exc_info.value.status_code == 401
    assert exc_info.value.code == "SESSION_EXPIRED"


@pytest.mark.asyncio
async def test_create_session_stores_payload(monkeypatch: pytest.MonkeyPatch):
    stored: dict = {}

    async def fake_set_session_data(session_id: str, payload: dict, ttl: int) -> None:
        stored[session_id] = (payload, ttl)

    monkeypatch.setattr(session_service, "set_session_data", fake_set_session_data)

    session_id = await session_service.create_session(3, "bob", ttl=120)

    payload, ttl = stored[session_id]
    assert ttl == 120
    assert payload["user_id"] == 3
    assert payload["username"] == "bob"
    assert payload["expires"] > NOW
