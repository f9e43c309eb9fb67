"""Ranking service for user and livestream leaderboards.

Score of an entity = number of reactions + sum of livecomment tips, counted
over the entity's livestreams. Scores are recomputed on every call.

Ranking rules:
1. Users: standard competition ranking. rank = 1 + number of users with a
   strictly greater score, so equal scores share a rank.
2. Livestreams: score DESC, then livestream id ASC. Lower id wins ties, so
   every livestream gets a distinct rank.

Two interchangeable strategies produce the same integers:
- QUERY: a single comparison query counting entities that outrank the target.
- SCAN: fetch every score in one query, then rank in memory with the pure
  helpers below.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from streamstats.models import Livecomment, Livestream, Reaction, User
from streamstats.settings import RankingStrategy, get_settings


@dataclass(frozen=True)
class UserRankingEntry:
    """Score of one user."""

    username: str
    score: int


@dataclass(frozen=True)
class LivestreamRankingEntry:
    """Score of one livestream."""

    livestream_id: int
    score: int


# ============================================================
# Pure orderings
# ============================================================


def livestream_ranking_key(entry: LivestreamRankingEntry) -> tuple[int, int]:
    """Total order key for livestreams.

    Sorting ascending by this key puts the best livestream last: higher score
    first, and on equal score the lower id.
    """
    return (entry.score, -entry.livestream_id)


def outranks(a: LivestreamRankingEntry, b: LivestreamRankingEntry) -> bool:
    """Return True if livestream `a` is ranked strictly better than `b`."""
    return livestream_ranking_key(a) > livestream_ranking_key(b)


def rank_livestream(entries: Iterable[LivestreamRankingEntry], livestream_id: int) -> int:
    """Rank of a livestream among all entries.

    Args:
        entries: Scores of every livestream.
        livestream_id: Target livestream.

    Returns:
        1-based rank.

    Raises:
        LookupError: If the target is not among the entries.
    """
    ranking = sorted(entries, key=livestream_ranking_key)

    rank = 1
    for entry in reversed(ranking):
        if entry.livestream_id == livestream_id:
            return rank
        rank += 1
    raise LookupError(f"livestream {livestream_id} is not ranked")


def rank_user(entries: Iterable[UserRankingEntry], username: str) -> int:
    """Competition rank of a user among all entries.

    Raises:
        LookupError: If the target is not among the entries.
    """
    scores = {entry.username: entry.score for entry in entries}
    if username not in scores:
        raise LookupError(f"user {username} is not ranked")

    target = scores[username]
    return 1 + sum(1 for score in scores.values() if score > target)


# ============================================================
# Score queries
# ============================================================


def user_scores_query() -> Select:
    """SELECT (username, score) for every user, including users without livestreams."""
    reactions = (
        select(func.count(Reaction.id))
        .select_from(Reaction)
        .join(Livestream, Livestream.id == Reaction.livestream_id)
        .where(Livestream.user_id == User.id)
        .correlate(User)
        .scalar_subquery()
    )
    tips = (
        select(func.coalesce(func.sum(Livecomment.tip), 0))
        .select_from(Livecomment)
        .join(Livestream, Livestream.id == Livecomment.livestream_id)
        .where(Livestream.user_id == User.id)
        .correlate(User)
        .scalar_subquery()
    )
    return select(User.name.label("username"), (reactions + tips).label("score"))


def livestream_scores_query() -> Select:
    """SELECT (livestream_id, score) for every livestream."""
    reactions = (
        select(func.count(Reaction.id))
        .where(Reaction.livestream_id == Livestream.id)
        .correlate(Livestream)
        .scalar_subquery()
    )
    tips = (
        select(func.coalesce(func.sum(Livecomment.tip), 0))
        .where(Livecomment.livestream_id == Livestream.id)
        .correlate(Livestream)
        .scalar_subquery()
    )
    return select(Livestream.id.label("livestream_id"), (reactions + tips).label("score"))


async def fetch_user_ranking(session: AsyncSession) -> list[UserRankingEntry]:
    """Load every user's score in one round-trip."""
    result = await session.execute(user_scores_query())
    return [UserRankingEntry(username=row.username, score=int(row.score)) for row in result]


async def fetch_livestream_ranking(session: AsyncSession) -> list[LivestreamRankingEntry]:
    """Load every livestream's score in one round-trip."""
    result = await session.execute(livestream_scores_query())
    return [
        LivestreamRankingEntry(livestream_id=row.livestream_id, score=int(row.score))
        for row in result
    ]


# ============================================================
# Rank
# ============================================================


async def compute_user_rank(
    session: AsyncSession,
    username: str,
    strategy: RankingStrategy | None = None,
) -> int:
    """Compute a user's rank inside the caller's snapshot.

    Args:
        session: Open snapshot session.
        username: Target user name (must exist).
        strategy: QUERY or SCAN; defaults to the configured strategy.

    Returns:
        1-based competition rank.
    """
    strategy = strategy or get_settings().ranking_strategy
    if strategy is RankingStrategy.SCAN:
        return rank_user(await fetch_user_ranking(session), username)

    scores = user_scores_query().cte("user_scores")
    target = (
        select(scores.c.score)
        .where(scores.c.username == username)
        .correlate(None)
        .scalar_subquery()
    )
    query = select(func.count() + 1).select_from(scores).where(scores.c.score > target)

    result = await session.execute(query)
    return int(result.scalar_one())


async def compute_livestream_rank(
    session: AsyncSession,
    livestream_id: int,
    strategy: RankingStrategy | None = None,
) -> int:
    """Compute a livestream's rank inside the caller's snapshot.

    Args:
        session: Open snapshot session.
        livestream_id: Target livestream (must exist).
        strategy: QUERY or SCAN; defaults to the configured strategy.

    Returns:
        1-based rank, ties broken by lower id.
    """
    strategy = strategy or get_settings().ranking_strategy
    if strategy is RankingStrategy.SCAN:
        return rank_livestream(await fetch_livestream_ranking(session), livestream_id)

    scores = livestream_scores_query().cte("livestream_scores")
    target = (
        select(scores.c.score)
        .where(scores.c.livestream_id == livestream_id)
        .correlate(None)
        .scalar_subquery()
    )
    query = (
        select(func.count() + 1)
        .select_from(scores)
        .where(
            or_(
                scores.c.score > target,
                and_(scores.c.score == target, scores.c.livestream_id < livestream_id),
            )
        )
    )

    result = await session.execute(query)
    return int(result.scalar_one())
