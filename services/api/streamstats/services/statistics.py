"""Statistics for users and livestreams.

Flow for both endpoints:
1. Open one read snapshot (transaction) for the whole call
2. Fetch the entity (missing -> NotFoundError)
3. Compute rank (see services.ranking)
4. Compute aggregates (see services.aggregates)
5. Commit and return the response schema

Any database error other than "no row" aborts the snapshot and surfaces as
StoreFailureError with the cause in its message. No retries, no partial
results.
"""

import logging
import re
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from streamstats.models import Livestream, User
from streamstats.schemas import LivestreamStatistics, UserStatistics
from streamstats.services import aggregates
from streamstats.services.errors import BadInputError, NotFoundError, StoreFailureError
from streamstats.services.ranking import compute_livestream_rank, compute_user_rank
from streamstats.settings import RankingStrategy
from streamstats.stores.postgres import get_snapshot

logger = logging.getLogger("uvicorn.error")

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MAX = 2**63 - 1


@contextmanager
def _store_step(action: str) -> Iterator[None]:
    """Escalate database errors raised inside the block to StoreFailureError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception("Statistics query failed: %s", action)
        raise StoreFailureError(f"failed to {action}: {e}") from e


def parse_livestream_id(raw: str) -> int:
    """Parse a livestream id from a path segment.

    Raises:
        BadInputError: If the value is not a base-10 integer in the signed 64-bit range.
    """
    if not _INTEGER_RE.fullmatch(raw) or not -_INT64_MAX - 1 <= int(raw) <= _INT64_MAX:
        raise BadInputError(
            "livestream_id in path must be integer",
            code="INVALID_LIVESTREAM_ID",
            detail={"livestream_id": raw},
        )
    return int(raw)


async def get_user_statistics(
    username: str,
    strategy: RankingStrategy | None = None,
) -> UserStatistics:
    """Compute statistics for the user with the given name.

    Args:
        username: User name from the URL.
        strategy: Ranking strategy override (defaults to settings).

    Returns:
        UserStatistics computed from a single snapshot.

    Raises:
        NotFoundError: No user has that name.
        StoreFailureError: Any other data access failure.
    """
    with _store_step("run user statistics transaction"):
        async with get_snapshot() as session:
            with _store_step("get user"):
                result = await session.execute(select(User).where(User.name == username))
                user = result.scalar_one_or_none()
            if user is None:
                logger.warning("User statistics requested for unknown user %r", username)
                raise NotFoundError(
                    "not found user that has the given username",
                    code="USER_NOT_FOUND",
                    detail={"username": username},
                )

            with _store_step("get rank"):
                rank = await compute_user_rank(session, username, strategy)

            with _store_step("get statistics"):
                total_reactions = await aggregates.count_user_reactions(session, user.id)
                total_livecomments = await aggregates.count_user_livecomments(session, user.id)
                total_tip = await aggregates.sum_user_tips(session, user.id)
                viewers_count = await aggregates.count_user_viewers(session, user.id)

            with _store_step("find favorite emoji"):
                favorite_emoji = await aggregates.find_favorite_emoji(session, user.id)

    return UserStatistics(
        rank=rank,
        viewers_count=viewers_count,
        total_reactions=total_reactions,
        total_livecomments=total_livecomments,
        total_tip=total_tip,
        favorite_emoji=favorite_emoji,
    )


async def get_livestream_statistics(
    livestream_id: int,
    strategy: RankingStrategy | None = None,
) -> LivestreamStatistics:
    """Compute statistics for one livestream.

    Raises:
        NotFoundError: No livestream has that id.
        StoreFailureError: Any other data access failure.
    """
    with _store_step("run livestream statistics transaction"):
        async with get_snapshot() as session:
            with _store_step("get livestream"):
                livestream = await session.get(Livestream, livestream_id)
            if livestream is None:
                logger.warning("Livestream statistics requested for unknown livestream %s", livestream_id)
                raise NotFoundError(
                    "cannot get stats of not found livestream",
                    code="LIVESTREAM_NOT_FOUND",
                    detail={"livestream_id": livestream_id},
                )

            with _store_step("get rank"):
                rank = await compute_livestream_rank(session, livestream_id, strategy)

            with _store_step("count livestream viewers"):
                viewers_count = await aggregates.count_livestream_viewers(session, livestream_id)

            with _store_step("find maximum tip livecomment"):
                max_tip = await aggregates.max_livestream_tip(session, livestream_id)

            with _store_step("count total reactions"):
                total_reactions = await aggregates.count_livestream_reactions(session, livestream_id)

            with _store_step("count total spam reports"):
                total_reports = await aggregates.count_livestream_reports(session, livestream_id)

    return LivestreamStatistics(
        rank=rank,
        viewers_count=viewers_count,
        total_reactions=total_reactions,
        total_reports=total_reports,
        max_tip=max_tip,
    )
