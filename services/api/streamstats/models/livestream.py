"""Livestream model.

A livestream is owned by one user and is the target of reactions,
livecomments, viewer history entries and spam reports.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from streamstats.stores.postgres import Base, BigIntId


class Livestream(Base):
    """A scheduled or running stream."""

    __tablename__ = "livestreams"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)

    # Owner
    user_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("users.id"), index=True)

    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text, default="")
    playlist_url: Mapped[str] = mapped_column(String(255), default="")
    thumbnail_url: Mapped[str] = mapped_column(String(255), default="")

    # Reservation window
    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    end_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<Livestream {self.id} user={self.user_id}>"


class LivestreamViewerHistory(Base):
    """One row per viewer entering a livestream."""

    __tablename__ = "livestream_viewers_history"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)
    user_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("users.id"))
    livestream_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("livestreams.id"), index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<LivestreamViewerHistory livestream={self.livestream_id} user={self.user_id}>"
