"""Livecomment and spam report models.

Livecomments may carry a tip; the tip sum is the second half of a score.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from streamstats.stores.postgres import Base, BigIntId


class Livecomment(Base):
    """Chat message posted to a livestream."""

    __tablename__ = "livecomments"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)
    user_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("users.id"))
    livestream_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("livestreams.id"), index=True)

    comment: Mapped[str] = mapped_column(Text)
    tip: Mapped[int] = mapped_column(BigInteger, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Livecomment {self.id} tip={self.tip}>"


class LivecommentReport(Base):
    """Spam flag raised against a livecomment."""

    __tablename__ = "livecomment_reports"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)

    # Reporting user
    user_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("users.id"))
    livestream_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("livestreams.id"), index=True)
    livecomment_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("livecomments.id"))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<LivecommentReport livecomment={self.livecomment_id}>"
