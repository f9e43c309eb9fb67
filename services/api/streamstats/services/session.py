"""Session verification.

Sessions live in Redis as JSON under `session:{id}`:
    {"user_id": 1, "username": "alice", "expires": 1700003600}

The session id travels in a cookie. Verification runs before any statistics
logic and either returns the session or raises SessionError (401/403).
"""

import logging
import time
from dataclasses import dataclass
from uuid import uuid4

from streamstats.services.errors import SessionError
from streamstats.settings import get_settings
from streamstats.stores.redis import get_session_data, set_session_data

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class UserSession:
    """A verified session."""

    session_id: str
    user_id: int
    username: str
    expires: int


async def verify_user_session(session_id: str | None, now: float | None = None) -> UserSession:
    """Verify a session id taken from the request cookie.

    Args:
        session_id: Cookie value, or None if the cookie is missing.
        now: Current epoch seconds (defaults to time.time()).

    Returns:
        The verified session.

    Raises:
        SessionError: 403 if no session can be loaded or it lacks an expiry,
            401 if it lacks a user id or has expired.
    """
    if not session_id:
        raise SessionError("failed to get session", code="SESSION_INVALID", status_code=403)

    payload = await get_session_data(session_id)
    if payload is None:
        raise SessionError("failed to get session", code="SESSION_INVALID", status_code=403)

    expires = payload.get("expires")
    if expires is None:
        raise SessionError(
            "failed to get EXPIRES value from session",
            code="SESSION_INVALID",
            status_code=403,
        )

    user_id = payload.get("user_id")
    if user_id is None:
        raise SessionError(
            "failed to get USERID value from session",
            code="SESSION_INVALID",
            status_code=401,
        )

    now = time.time() if now is None else now
    if now > int(expires):
        logger.info("Rejected expired session for user_id=%s", user_id)
        raise SessionError("session has expired", code="SESSION_EXPIRED", status_code=401)

    return UserSession(
        session_id=session_id,
        user_id=int(user_id),
        username=str(payload.get("username", "")),
        expires=int(expires),
    )


async def create_session(user_id: int, username: str, ttl: int | None = None) -> str:
    """Store a new session and return its id (the cookie value)."""
    ttl = ttl or get_settings().session_ttl_seconds
    session_id = uuid4().hex
    await set_session_data(
        session_id,
        {"user_id": user_id, "username": username, "expires": int(time.time()) + ttl},
        ttl,
    )
    return session_id
