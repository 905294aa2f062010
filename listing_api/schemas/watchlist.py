"""
Pydantic schemas for watchlist requests and responses.
"""

from pydantic import BaseModel, Field
from typing import List
from listing_api.schemas.property import PropertyResponse


class WatchedPropertyResponse(PropertyResponse):
    """Property on a watchlist, with the entry id needed to remove it."""

    watchlist_id: int


class WatchListResponse(BaseModel):
    properties: List[WatchedPropertyResponse]
    count: int


class WatchListCreatedResponse(BaseModel):
    property: PropertyResponse
    message: str = Field(..., examples=["Property added to watchlist"])
