"""Service-level errors.

Each error carries the HTTP status and machine-readable code the API
returns, so routers stay thin and the app's exception handler renders the
structured error format.
"""

from typing import Any


class ApiError(RuntimeError):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code


class NotFoundError(ApiError):
    """Requested user or livestream does not exist."""

    status_code = 400
    code = "NOT_FOUND"


class BadInputError(ApiError):
    """Malformed identifier in the request."""

    status_code = 400
    code = "BAD_INPUT"


class StoreFailureError(ApiError):
    """Unexpected data access failure; message includes the cause."""

    status_code = 500
    code = "STORE_FAILURE"


class SessionError(ApiError):
    """Caller is not authenticated."""

    status_code = 401
    code = "SESSION_INVALID"
