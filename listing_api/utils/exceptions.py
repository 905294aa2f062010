"""
Custom exception classes for the Property Watch API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(APIException):
    """
    Validation error exception.

    Carries the human-readable full messages plus the per-field messages
    they were built from, e.g. {"email": ["has already been taken"]}.
    """

    def __init__(
        self,
        errors: List[str],
        field_errors: Optional[Dict[str, List[str]]] = None
    ):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="; ".join(errors),
            error_code="VALIDATION_ERROR"
        )
        self.errors = list(errors)
        self.field_errors = field_errors or {}

    @classmethod
    def from_fields(cls, field_errors: Dict[str, List[str]]) -> "ValidationError":
        """Build full messages such as "Email is invalid" from field-keyed messages."""
        messages = [
            f"{field.replace('_', ' ').capitalize()} {message}"
            for field, field_messages in field_errors.items()
            for message in field_messages
        ]
        return cls(messages, field_errors)


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, resource: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
            error_code="NOT_FOUND"
        )


class UnauthorizedError(APIException):
    """Authentication required exception."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class BadRequestError(APIException):
    """Bad request exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="BAD_REQUEST"
        )


# Authentication specific exceptions
class InvalidCredentialsError(UnauthorizedError):
    """Invalid login credentials exception."""

    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(detail)


class MissingAuthorizationError(UnauthorizedError):
    """No Authorization header on a protected request."""

    def __init__(self, detail: str = "Missing authorization header"):
        super().__init__(detail)


class MalformedAuthorizationError(UnauthorizedError):
    """Authorization header present but not of the form "Bearer <token>"."""

    def __init__(self, detail: str = "Invalid authorization header format"):
        super().__init__(detail)


class TokenExpiredError(UnauthorizedError):
    """JWT token expired exception."""

    def __init__(self, detail: str = "Token has expired"):
        super().__init__(detail)


class InvalidTokenError(UnauthorizedError):
    """Invalid JWT token exception."""

    def __init__(self, reason: Optional[str] = None):
        detail = f"Invalid token: {reason}" if reason else "Invalid token"
        super().__init__(detail)


class UserNotFoundError(UnauthorizedError):
    """Token is valid but refers to a user that no longer exists."""

    def __init__(self, detail: str = "User not found"):
        super().__init__(detail)


# Resource specific exceptions
class PropertyNotFoundError(NotFoundError):
    """Property not found exception."""

    def __init__(self):
        super().__init__("Property")


class WatchListEntryNotFoundError(NotFoundError):
    """Watchlist entry missing or owned by another user."""

    def __init__(self):
        super().__init__("Watchlist entry")


class DuplicateWatchListEntryError(APIException):
    """The (user, property) pair is already on the watchlist."""

    def __init__(self, detail: str = "Property is already in your watchlist"):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code="DUPLICATE"
        )


class MissingParameterError(BadRequestError):
    """Required top-level request parameter is absent or empty."""

    def __init__(self, param: str):
        super().__init__(f"param is missing or the value is empty: {param}")
        self.param = param
