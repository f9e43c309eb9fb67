"""Schemas for the statistics endpoints.

GET /api/user/{username}/statistics -> UserStatistics
GET /api/livestream/{livestream_id}/statistics -> LivestreamStatistics
"""

from pydantic import BaseModel, Field


class UserStatistics(BaseModel):
    """Aggregate statistics of a user across all of their livestreams."""

    rank: int = Field(ge=1)
    viewers_count: int = Field(ge=0)
    total_reactions: int = Field(ge=0)
    total_livecomments: int = Field(ge=0)
    total_tip: int = Field(ge=0)
    favorite_emoji: str = ""


class LivestreamStatistics(BaseModel):
    """Aggregate statistics of a single livestream."""

    rank: int = Field(ge=1)
    viewers_count: int = Field(ge=0)
    total_reactions: int = Field(ge=0)
    total_reports: int = Field(ge=0)
    max_tip: int = Field(ge=0)
