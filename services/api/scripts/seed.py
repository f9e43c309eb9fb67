#!/usr/bin/env python3
"""Seed database with a small livestreaming dataset.

Creates:
- Users (streamers and viewers)
- Livestreams owned by the streamers
- Reactions, tipped livecomments, spam reports and viewer history

Optionally stores a session in Redis and prints the cookie so the
statistics endpoints can be called by hand.

The seed is idempotent: users are looked up by name and skipped if present.

Usage:
    cd services/api
    python -m scripts.seed [--create-tables] [--session alice]
"""

import argparse
import asyncio
import os
import sys
from datetime import datetime, timedelta, timezone

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from streamstats.models import (
    Livecomment,
    LivecommentReport,
    Livestream,
    LivestreamViewerHistory,
    Reaction,
    User,
)
from streamstats.services.session import create_session
from streamstats.settings import get_settings
from streamstats.stores.postgres import close_db, create_tables, get_session, init_db
from streamstats.stores.redis import close_redis, init_redis

load_dotenv()

# ============================================================
# Dataset
# ============================================================

USERS = [
    {"name": "alice", "display_name": "Alice"},
    {"name": "bob", "display_name": "Bob"},
    {"name": "carol", "display_name": "Carol"},
    {"name": "dave", "display_name": "Dave"},
]

# owner -> livestream definitions
LIVESTREAMS = {
    "bob": [
        {
            "title": "Speedrun night",
            "reactions": {"innocent": 3, "+1": 2},
            "tips": [0, 500, 50],
            "viewers": ["alice", "carol"],
            "reports": 1,
        },
        {
            "title": "Chill coding",
            "reactions": {"tada": 1},
            "tips": [100],
            "viewers": ["dave"],
            "reports": 0,
        },
    ],
    "carol": [
        {
            "title": "Cooking live",
            "reactions": {"+1": 4, "heart": 4},
            "tips": [1000],
            "viewers": ["alice", "bob", "dave"],
            "reports": 2,
        },
    ],
    # alice and dave stream nothing
}


async def seed_database(create: bool = False) -> None:
    """Seed database with the dataset above."""
    await init_db()
    if create:
        print("🧱 Creating tables...")
        await create_tables()

    async with get_session() as session:
        print("🌱 Seeding database...")

        print("\n👤 Creating users...")
        user_map = await seed_users(session)

        print("\n📺 Creating livestreams and activity...")
        await seed_livestreams(session, user_map)

    print("\n✅ Database seeded successfully!")
    await close_db()


async def seed_users(session: AsyncSession) -> dict[str, int]:
    """Seed users and return mapping of name -> id."""
    user_map: dict[str, int] = {}

    for u in USERS:
        result = await session.execute(select(User).where(User.name == u["name"]))
        existing = result.scalar_one_or_none()

        if existing:
            print(f"  ⏭️  {u['name']} (exists)")
            user_map[u["name"]] = existing.id
            continue

        user = User(name=u["name"], display_name=u["display_name"], description="", password="")
        session.add(user)
        await session.flush()
        user_map[u["name"]] = user.id
        print(f"  ✅ {u['name']}")

    return user_map


async def seed_livestreams(session: AsyncSession, user_map: dict[str, int]) -> None:
    """Seed livestreams for each owner, skipping owners that already stream."""
    viewers = list(user_map)
    start = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)

    for owner, streams in LIVESTREAMS.items():
        owner_id = user_map[owner]
        result = await session.execute(select(Livestream.id).where(Livestream.user_id == owner_id).limit(1))
        if result.first() is not None:
            print(f"  ⏭️  {owner} (livestreams exist)")
            continue

        for i, ls_def in enumerate(streams):
            livestream = Livestream(
                user_id=owner_id,
                title=ls_def["title"],
                description="",
                playlist_url="",
                thumbnail_url="",
                start_at=start + timedelta(hours=i),
                end_at=start + timedelta(hours=i + 1),
            )
            session.add(livestream)
            await session.flush()

            for emoji_name, count in ls_def["reactions"].items():
                for n in range(count):
                    session.add(
                        Reaction(
                            user_id=user_map[viewers[n % len(viewers)]],
                            livestream_id=livestream.id,
                            emoji_name=emoji_name,
                        )
                    )

            comments = []
            for n, tip in enumerate(ls_def["tips"]):
                comment = Livecomment(
                    user_id=user_map[viewers[n % len(viewers)]],
                    livestream_id=livestream.id,
                    comment="nice stream!" if tip == 0 else "take my money",
                    tip=tip,
                )
                session.add(comment)
                comments.append(comment)
            await session.flush()

            for n in range(ls_def["reports"]):
                session.add(
                    LivecommentReport(
                        user_id=owner_id,
                        livestream_id=livestream.id,
                        livecomment_id=comments[n % len(comments)].id,
                    )
                )

            for viewer in ls_def["viewers"]:
                session.add(
                    LivestreamViewerHistory(user_id=user_map[viewer], livestream_id=livestream.id)
                )

            print(f"  ✅ {owner}: {ls_def['title']} (id={livestream.id})")


async def print_session_cookie(username: str) -> None:
    """Create a Redis session for a seeded user and print the cookie."""
    await init_db()
    async with get_session() as session:
        result = await session.execute(select(User).where(User.name == username))
        user = result.scalar_one_or_none()
    await close_db()

    if user is None:
        print(f"⚠️  User not found: {username}")
        return

    await init_redis()
    session_id = await create_session(user.id, user.name)
    await close_redis()
    print(f"\n🍪 Cookie: {get_settings().session_cookie_name}={session_id}")


async def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the livestream statistics database")
    parser.add_argument("--create-tables", action="store_true", help="create tables before seeding (dev only)")
    parser.add_argument("--session", metavar="USERNAME", help="print a session cookie for this user")
    args = parser.parse_args()

    await seed_database(create=args.create_tables)
    if args.session:
        await print_session_cookie(args.session)


if __name__ == "__main__":
    asyncio.run(main())
