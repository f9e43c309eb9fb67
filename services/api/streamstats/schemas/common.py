"""Error envelope shared by every endpoint."""

from typing import Any

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Machine-readable code plus human-readable message."""

    code: str
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format.

    Format: { "error": { "code": str, "message": str, "detail": object } }

    Error responses never carry partial statistics.
    """

    error: ErrorDetail

    @classmethod
    def build(cls, code: str, message: str, detail: dict[str, Any] | None = None) -> "ErrorResponse":
        return cls(error=ErrorDetail(code=code, message=message, detail=detail))
