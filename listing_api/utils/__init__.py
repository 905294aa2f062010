"""
Utility modules for the Property Watch API.
"""

from .auth import (
    TokenCodec,
    TokenPayload,
    hash_password,
    verify_password,
    extract_token_from_header
)

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    BadRequestError,
    InvalidCredentialsError,
    MissingAuthorizationError,
    MalformedAuthorizationError,
    TokenExpiredError,
    InvalidTokenError,
    UserNotFoundError,
    PropertyNotFoundError,
    WatchListEntryNotFoundError,
    DuplicateWatchListEntryError,
    MissingParameterError
)

from .pagination import DEFAULT_LIMIT, MAX_LIMIT, clamp_limit, parse_int
from .params import require_params

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "TokenCodec",
    "TokenPayload",
    "hash_password",
    "verify_password",
    "extract_token_from_header",

    # Exceptions
    "APIException",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "BadRequestError",
    "InvalidCredentialsError",
    "MissingAuthorizationError",
    "MalformedAuthorizationError",
    "TokenExpiredError",
    "InvalidTokenError",
    "UserNotFoundError",
    "PropertyNotFoundError",
    "WatchListEntryNotFoundError",
    "DuplicateWatchListEntryError",
    "MissingParameterError",

    # Pagination and params
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "clamp_limit",
    "parse_int",
    "require_params",
]
