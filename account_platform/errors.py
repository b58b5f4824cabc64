"""Error taxonomy shared by the account service and the HTTP layer.

Each error carries the HTTP status it maps to and a message that is safe to
return to clients. Driver- or library-specific detail never goes in `message`.
"""

from __future__ import annotations


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Unknown error occurred"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid request"


class ConflictError(AppError):
    """A unique field (username/email) is already taken."""

    status_code = 409
    default_message = "Already exists"


class AuthenticationError(AppError):
    """Bad credentials, or a missing/invalid/expired token."""

    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class UnexpectedError(AppError):
    """Store/connection failure or any other server-side fault."""

    status_code = 500
    default_message = "Internal server error"


__all__ = [
    "AppError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "NotFoundError",
    "UnexpectedError",
]
