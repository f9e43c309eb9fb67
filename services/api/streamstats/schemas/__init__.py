"""Pydantic schemas for API request/response validation."""

from streamstats.schemas.common import ErrorDetail, ErrorResponse
from streamstats.schemas.statistics import LivestreamStatistics, UserStatistics

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "LivestreamStatistics",
    "UserStatistics",
]
