"""User model.

A user is identified by a unique name and owns zero or more livestreams.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from streamstats.stores.postgres import Base, BigIntId


class User(Base):
    """Streamer or viewer account."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)

    # Login name, used in URLs (e.g. /api/user/alice/statistics)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    display_name: Mapped[str] = mapped_column(String(255), default="")
    description: Mapped[str] = mapped_column(Text, default="")
    password: Mapped[str] = mapped_column(String(255), default="")  # bcrypt hash

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User {self.name}>"
