"""
Property API endpoints for listing, reading and maintaining properties.
Listing and reading are public; writes require a bearer token.
"""

from fastapi import APIRouter, Body, Depends, Path, Query, Response, status
from typing import Any, Optional

from listing_api.models.user import User
from listing_api.services.property import PropertyService
from listing_api.schemas.property import (
    PERMITTED_FIELDS,
    PropertyListResponse,
    PropertyResponse,
)
from listing_api.schemas.error import get_error_responses
from listing_api.utils.dependencies import get_current_user, get_property_service
from listing_api.utils.params import require_params
from listing_api.utils.pagination import INT64_MAX, INT64_MIN


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "",
    response_model=None,
    status_code=status.HTTP_200_OK,
    summary="List properties",
    description="Cursor-paginated property listing ordered by id, with optional filters",
    responses={200: {"model": PropertyListResponse}}
)
async def list_properties(
    property_type: Optional[str] = Query(None, description="Exact property type, e.g. house"),
    min_bedrooms: Optional[str] = Query(None, description="Minimum bedrooms (inclusive)"),
    max_bedrooms: Optional[str] = Query(None, description="Maximum bedrooms (inclusive)"),
    min_price: Optional[str] = Query(None, description="Minimum price (inclusive)"),
    max_price: Optional[str] = Query(None, description="Maximum price (inclusive)"),
    cursor: Optional[str] = Query(None, description="Return properties with an id greater than this"),
    limit: Optional[str] = Query(None, description="Page size; defaults to 25, capped at 100"),
    property_service: PropertyService = Depends(get_property_service)
) -> dict:
    """
    Get one page of properties.

    Unparseable numeric parameters are ignored rather than rejected. The
    metadata carries ``next_cursor`` only when another page exists.
    """
    filters = property_service.filters_from_query({
        "property_type": property_type,
        "min_bedrooms": min_bedrooms,
        "max_bedrooms": max_bedrooms,
        "min_price": min_price,
        "max_price": max_price,
        "cursor": cursor,
    })

    properties, effective_limit, next_cursor = await property_service.list_properties(filters, limit)

    metadata = {"limit": effective_limit}
    if next_cursor is not None:
        metadata["next_cursor"] = next_cursor

    return {
        "properties": [PropertyResponse.model_validate(prop.to_dict()).model_dump(mode="json") for prop in properties],
        "metadata": metadata,
    }


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Get property details",
    description="Get a property with its images ordered by position",
    responses=get_error_responses(404)
)
async def get_property(
    property_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX, description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Get detailed information about a specific property.

    Raises:
        PropertyNotFoundError: If property doesn't exist
    """
    property_obj = await property_service.get_property(property_id)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description='Create a property from {"property": {...}}. Requires authentication.',
    responses=get_error_responses(400, 401, 422)
)
async def create_property(
    payload: Any = Body(None),
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Create a new property listing.

    Raises:
        MissingParameterError: If no property attributes were sent
        ValidationError: If property data is invalid
    """
    params = require_params(payload, "property", PERMITTED_FIELDS)
    property_obj = await property_service.create_property(params)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Update property",
    description="Update the supplied property fields. Requires authentication.",
    responses=get_error_responses(400, 401, 404, 422)
)
async def update_property(
    property_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX, description="Property ID"),
    payload: Any = Body(None),
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Update an existing property.

    Raises:
        PropertyNotFoundError: If property doesn't exist
        MissingParameterError: If no property attributes were sent
        ValidationError: If update data is invalid
    """
    params = require_params(payload, "property", PERMITTED_FIELDS)
    property_obj = await property_service.update_property(property_id, params)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete property",
    description="Delete a property and its images, events and watchlist entries. Requires authentication.",
    responses=get_error_responses(401, 404)
)
async def delete_property(
    property_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX, description="Property ID"),
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> Response:
    """
    Delete a property.

    Raises:
        PropertyNotFoundError: If property doesn't exist
    """
    await property_service.delete_property(property_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
