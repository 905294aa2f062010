"""
Watchlist endpoints for the authenticated user.
"""

from typing import Any
from fastapi import APIRouter, Body, Depends, Path, Response, status
from listing_api.models.user import User
from listing_api.services.watchlist import WatchListService
from listing_api.schemas.watchlist import WatchListCreatedResponse, WatchListResponse
from listing_api.schemas.error import get_error_responses
from listing_api.utils.dependencies import get_current_user, get_watchlist_service
from listing_api.utils.params import require_params
from listing_api.utils.pagination import INT64_MAX, INT64_MIN


router = APIRouter(prefix="/watchlists", tags=["Watchlists"])

WATCHLIST_FIELDS = ("property_id",)


@router.get(
    "",
    response_model=WatchListResponse,
    status_code=status.HTTP_200_OK,
    summary="List watched properties",
    description="Properties on the current user's watchlist, each with its watchlist_id",
    responses=get_error_responses(401)
)
async def list_watchlist(
    current_user: User = Depends(get_current_user),
    watchlist_service: WatchListService = Depends(get_watchlist_service)
) -> WatchListResponse:
    """
    Get the current user's watchlist.

    Only the authenticated user's entries are returned; a user_id query
    parameter has no effect.
    """
    watched = await watchlist_service.list_watched(current_user)
    properties = [
        {**property_obj.to_dict(), "watchlist_id": entry.id}
        for entry, property_obj in watched
    ]
    return WatchListResponse(properties=properties, count=len(properties))


@router.post(
    "",
    response_model=WatchListCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Watch a property",
    description='Add a property to the watchlist from {"watchlist": {"property_id": ...}}',
    responses=get_error_responses(400, 401, 404, 422)
)
async def add_to_watchlist(
    payload: Any = Body(None),
    current_user: User = Depends(get_current_user),
    watchlist_service: WatchListService = Depends(get_watchlist_service)
) -> WatchListCreatedResponse:
    """
    Add a property to the current user's watchlist.

    Raises:
        MissingParameterError: If property_id is absent
        PropertyNotFoundError: If the property doesn't exist
        DuplicateWatchListEntryError: If the property is already watched
    """
    params = require_params(payload, "watchlist", WATCHLIST_FIELDS)
    property_obj = await watchlist_service.add_property(current_user, params)
    return WatchListCreatedResponse(
        property=property_obj.to_dict(),
        message="Property added to watchlist"
    )


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Stop watching a property",
    description="Remove one of the current user's watchlist entries",
    responses=get_error_responses(401, 404)
)
async def remove_from_watchlist(
    entry_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX, description="Watchlist entry ID"),
    current_user: User = Depends(get_current_user),
    watchlist_service: WatchListService = Depends(get_watchlist_service)
) -> Response:
    """
    Remove a watchlist entry.

    Raises:
        WatchListEntryNotFoundError: If the entry is missing or belongs to another user
    """
    await watchlist_service.remove_entry(current_user, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
