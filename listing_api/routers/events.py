"""
Property event history endpoint.
"""

from fastapi import APIRouter, Depends, Path, status
from listing_api.services.event import PropertyEventService
from listing_api.schemas.event import PropertyEventListResponse
from listing_api.schemas.error import get_error_responses
from listing_api.utils.dependencies import get_event_service
from listing_api.utils.pagination import INT64_MAX, INT64_MIN


router = APIRouter(prefix="/properties", tags=["Property Events"])


@router.get(
    "/{property_id}/property_events",
    response_model=PropertyEventListResponse,
    status_code=status.HTTP_200_OK,
    summary="List property events",
    description="History of a property, newest first, with a display rendering of each payload",
    responses=get_error_responses(404)
)
async def list_property_events(
    property_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX, description="Property ID"),
    event_service: PropertyEventService = Depends(get_event_service)
) -> PropertyEventListResponse:
    """
    Get the events recorded for a property.

    Raises:
        PropertyNotFoundError: If property doesn't exist
    """
    events = await event_service.list_events(property_id)
    return PropertyEventListResponse(
        events=[event_service.serialize(event) for event in events],
        count=len(events)
    )
