"""
Pydantic schemas for request/response validation.
"""

# Authentication schemas
from .auth import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    MessageResponse
)

# User schemas
from .user import (
    UserCreate,
    UserResponse
)

# Property schemas
from .property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyListResponse,
    ListingMetadata
)

# Image schemas
from .image import PropertyImageResponse

# Event schemas
from .event import (
    EventDisplay,
    EventPayload,
    GenericEventData,
    PriceChangedData,
    SoldData,
    PropertyEventResponse,
    PropertyEventListResponse,
    decode_event_data,
    format_event_data
)

# Watchlist schemas
from .watchlist import (
    WatchListResponse,
    WatchListCreatedResponse,
    WatchedPropertyResponse
)

# Error schemas
from .error import ErrorResponse, ValidationErrorResponse

__all__ = [
    # Authentication
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "MessageResponse",

    # Users
    "UserCreate",
    "UserResponse",

    # Properties
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "PropertyListResponse",
    "ListingMetadata",

    # Images
    "PropertyImageResponse",

    # Events
    "EventDisplay",
    "EventPayload",
    "GenericEventData",
    "PriceChangedData",
    "SoldData",
    "PropertyEventResponse",
    "PropertyEventListResponse",
    "decode_event_data",
    "format_event_data",

    # Watchlists
    "WatchListResponse",
    "WatchListCreatedResponse",
    "WatchedPropertyResponse",

    # Errors
    "ErrorResponse",
    "ValidationErrorResponse",
]
