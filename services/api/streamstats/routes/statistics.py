"""Statistics endpoints.

GET /api/user/{username}/statistics
GET /api/livestream/{livestream_id}/statistics

Routers are thin: verify the session, parse path values, call services.
Service errors are rendered by the app-level exception handler.
"""

from fastapi import APIRouter, Depends, Path, Request

from streamstats.schemas import ErrorResponse, LivestreamStatistics, UserStatistics
from streamstats.services.session import UserSession, verify_user_session
from streamstats.services.statistics import (
    get_livestream_statistics,
    get_user_statistics,
    parse_livestream_id,
)
from streamstats.settings import get_settings

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Unknown entity or malformed id"},
    401: {"model": ErrorResponse, "description": "Session missing user or expired"},
    403: {"model": ErrorResponse, "description": "No session"},
    500: {"model": ErrorResponse, "description": "Store failure"},
}


async def require_user_session(request: Request) -> UserSession:
    """Dependency: reject the request unless it carries a valid session cookie."""
    session_id = request.cookies.get(get_settings().session_cookie_name)
    return await verify_user_session(session_id)


@router.get(
    "/user/{username}/statistics",
    response_model=UserStatistics,
    responses=ERROR_RESPONSES,
)
async def user_statistics(
    username: str = Path(description="User name"),
    _session: UserSession = Depends(require_user_session),
) -> UserStatistics:
    """Get rank and aggregate statistics for a user."""
    return await get_user_statistics(username)


@router.get(
    "/livestream/{livestream_id}/statistics",
    response_model=LivestreamStatistics,
    responses=ERROR_RESPONSES,
)
async def livestream_statistics(
    livestream_id: str = Path(description="Livestream ID (integer)"),
    _session: UserSession = Depends(require_user_session),
) -> LivestreamStatistics:
    """Get rank and aggregate statistics for a livestream."""
    return await get_livestream_statistics(parse_livestream_id(livestream_id))
