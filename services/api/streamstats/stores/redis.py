"""Redis store for user sessions.

Handles:
- Connection lifecycle
- JSON values with TTL
- Session payloads keyed by session id

Statistics and scores are never cached here; they are recomputed from
Postgres on every request.
"""

import json
import logging
from typing import Any

import redis.asyncio as redis

from streamstats.settings import get_settings

# Key prefixes
PREFIX_SESSION = "session:"

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis() -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    _redis = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    await _redis.ping()
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


# ============================================================
# Generic JSON operations
# ============================================================


async def cache_get_json(key: str) -> dict[str, Any] | None:
    """Get JSON value.

    Args:
        key: Redis key.

    Returns:
        Parsed JSON dict or None if not found.
    """
    value = await _get_redis().get(key)
    if value:
        return json.loads(value)
    return None


async def cache_set_json(key: str, value: dict[str, Any], ttl: int) -> None:
    """Set JSON value with TTL.

    Args:
        key: Redis key.
        value: Dict to store as JSON.
        ttl: Time-to-live in seconds.
    """
    await _get_redis().setex(key, ttl, json.dumps(value))


# ============================================================
# Sessions
# ============================================================


async def get_session_data(session_id: str) -> dict[str, Any] | None:
    """Load a session payload.

    Args:
        session_id: Opaque id from the session cookie.

    Returns:
        Session payload or None if unknown or evicted.
    """
    return await cache_get_json(f"{PREFIX_SESSION}{session_id}")


async def set_session_data(session_id: str, payload: dict[str, Any], ttl: int) -> None:
    """Store a session payload.

    Args:
        session_id: Opaque id placed in the session cookie.
        payload: Session values (user_id, username, expires).
        ttl: Time-to-live in seconds.
    """
    await cache_set_json(f"{PREFIX_SESSION}{session_id}", payload, ttl)

