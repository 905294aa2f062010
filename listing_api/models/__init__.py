"""
Database models for the Property Watch API.
Includes User, Property, PropertyImage, PropertyEvent and WatchList models.
"""

from listing_api.models.user import User
from listing_api.models.property import Property, PropertyType, PropertyStatus, format_price
from listing_api.models.image import PropertyImage
from listing_api.models.event import PropertyEvent
from listing_api.models.watchlist import WatchList

__all__ = [
    "User",
    "Property",
    "PropertyType",
    "PropertyStatus",
    "format_price",
    "PropertyImage",
    "PropertyEvent",
    "WatchList",
]
