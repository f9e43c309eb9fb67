"""Reaction model.

A lightweight emoji response to a livestream. Each row counts as one point
towards the livestream's (and its owner's) score.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from streamstats.stores.postgres import Base, BigIntId


class Reaction(Base):
    """Emoji reaction on a livestream."""

    __tablename__ = "reactions"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)

    # Reacting user (not the livestream owner)
    user_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("users.id"))
    livestream_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("livestreams.id"), index=True)

    emoji_name: Mapped[str] = mapped_column(String(255))  # e.g. "innocent", "+1"

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Reaction :{self.emoji_name}: livestream={self.livestream_id}>"
