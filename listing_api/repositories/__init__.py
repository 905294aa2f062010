"""
Repository layer for data access operations.
Provides database operations with proper error handling and explicit query construction.
"""

from listing_api.repositories.base import BaseRepository
from listing_api.repositories.event import PropertyEventRepository
from listing_api.repositories.image import ImageRepository
from listing_api.repositories.property import PropertyFilters, PropertyRepository, build_listing_query
from listing_api.repositories.user import UserRepository
from listing_api.repositories.watchlist import WatchListRepository

__all__ = [
    "BaseRepository",
    "ImageRepository",
    "PropertyEventRepository",
    "PropertyFilters",
    "PropertyRepository",
    "UserRepository",
    "WatchListRepository",
    "build_listing_query",
]
