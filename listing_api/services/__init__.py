"""
Service layer for business logic implementation.
Contains services for authentication, properties, watchlists, events and error handling.
"""

from .auth import AuthService
from .property import PropertyService
from .watchlist import WatchListService
from .event import PropertyEventService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "PropertyService",
    "WatchListService",
    "PropertyEventService",
    "ErrorHandlerService"
]
