"""Domain errors raised by services and dependencies, mapped to HTTP responses in main."""

from typing import Any


class AppError(Exception):
    """Base class for errors that carry a client-facing message and status code."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Raised when request input is malformed; lists every violated constraint."""

    status_code = 400

    def __init__(
        self,
        errors: list[dict[str, Any]],
        message: str = "Validation failed",
    ) -> None:
        self.errors = errors
        super().__init__(message)


class AuthError(AppError):
    """Missing, malformed, invalid or expired token, or bad credentials."""

    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Raised when a username or email is already registered."""

    status_code = 409
