"""Service layer errors, each carrying the HTTP status it maps to."""
from typing import Optional


class ServiceError(Exception):
    """Base class for errors reported to API callers as ``{"message": ...}``."""

    status_code: int = 500

    def __init__(self, message: str, headers: Optional[dict[str, str]] = None) -> None:
        self.message = message
        self.headers = headers
        super().__init__(message)


class ValidationError(ServiceError):
    """Raised when user input is missing or malformed."""

    status_code = 400


class ConflictError(ServiceError):
    """Raised when a resource with the same identity already exists."""

    status_code = 400


class AuthError(ServiceError):
    """Raised for missing or bad credentials and for acting on another user's data."""

    status_code = 401


class NotFoundError(ServiceError):
    status_code = 404


class InternalError(ServiceError):
    """Raised when bookmark creation fails for a reason the caller cannot fix."""

    status_code = 500
