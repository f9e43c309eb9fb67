"""Raw counts behind the statistics endpoints.

Every aggregate is its own scalar query. Joining reactions, livecomments and
viewer history in one statement would multiply rows and double count.
All functions run on the caller's snapshot session and never write.
"""

from collections.abc import Mapping

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from streamstats.models import (
    Livecomment,
    LivecommentReport,
    Livestream,
    LivestreamViewerHistory,
    Reaction,
)


async def _scalar_int(session: AsyncSession, query) -> int:
    result = await session.execute(query)
    return int(result.scalar_one() or 0)


# ============================================================
# Per user (across all of the user's livestreams)
# ============================================================


async def count_user_reactions(session: AsyncSession, user_id: int) -> int:
    """Reactions received on the user's livestreams."""
    query = (
        select(func.count(Reaction.id))
        .select_from(Reaction)
        .join(Livestream, Livestream.id == Reaction.livestream_id)
        .where(Livestream.user_id == user_id)
    )
    return await _scalar_int(session, query)


async def count_user_livecomments(session: AsyncSession, user_id: int) -> int:
    """Livecomments posted on the user's livestreams."""
    query = (
        select(func.count(Livecomment.id))
        .select_from(Livecomment)
        .join(Livestream, Livestream.id == Livecomment.livestream_id)
        .where(Livestream.user_id == user_id)
    )
    return await _scalar_int(session, query)


async def sum_user_tips(session: AsyncSession, user_id: int) -> int:
    """Total tip received on the user's livestreams (0 if none)."""
    query = (
        select(func.coalesce(func.sum(Livecomment.tip), 0))
        .select_from(Livecomment)
        .join(Livestream, Livestream.id == Livecomment.livestream_id)
        .where(Livestream.user_id == user_id)
    )
    return await _scalar_int(session, query)


async def count_user_viewers(session: AsyncSession, user_id: int) -> int:
    """Viewer history entries across the user's livestreams."""
    query = (
        select(func.count(LivestreamViewerHistory.id))
        .select_from(LivestreamViewerHistory)
        .join(Livestream, Livestream.id == LivestreamViewerHistory.livestream_id)
        .where(Livestream.user_id == user_id)
    )
    return await _scalar_int(session, query)


def pick_favorite_emoji(counts: Mapping[str, int]) -> str:
    """Most used emoji; on equal counts the greatest name wins.

    Names are compared by code point, independent of the database collation.

    >>> pick_favorite_emoji({"smile": 2, "tada": 2, "+1": 1})
    'tada'
    >>> pick_favorite_emoji({})
    ''
    """
    if not counts:
        return ""
    name, _ = max(counts.items(), key=lambda item: (item[1], item[0]))
    return name


async def find_favorite_emoji(session: AsyncSession, user_id: int) -> str:
    """Favorite emoji over reactions on the user's livestreams ("" if none)."""
    query = (
        select(Reaction.emoji_name, func.count(Reaction.id))
        .select_from(Reaction)
        .join(Livestream, Livestream.id == Reaction.livestream_id)
        .where(Livestream.user_id == user_id)
        .group_by(Reaction.emoji_name)
    )
    result = await session.execute(query)
    return pick_favorite_emoji({name: int(count) for name, count in result})


# ============================================================
# Per livestream
# ============================================================


async def count_livestream_viewers(session: AsyncSession, livestream_id: int) -> int:
    """Viewer history entries for one livestream."""
    query = select(func.count(LivestreamViewerHistory.id)).where(
        LivestreamViewerHistory.livestream_id == livestream_id
    )
    return await _scalar_int(session, query)


async def max_livestream_tip(session: AsyncSession, livestream_id: int) -> int:
    """Largest single tip on one livestream (0 if none)."""
    query = select(func.coalesce(func.max(Livecomment.tip), 0)).where(
        Livecomment.livestream_id == livestream_id
    )
    return await _scalar_int(session, query)


async def count_livestream_reactions(session: AsyncSession, livestream_id: int) -> int:
    """Reactions on one livestream."""
    query = select(func.count(Reaction.id)).where(Reaction.livestream_id == livestream_id)
    return await _scalar_int(session, query)


async def count_livestream_reports(session: AsyncSession, livestream_id: int) -> int:
    """Spam reports filed on one livestream's livecomments."""
    query = select(func.count(LivecommentReport.id)).where(
        LivecommentReport.livestream_id == livestream_id
    )
    return await _scalar_int(session, query)
