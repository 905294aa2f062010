"""
Property service for managing property listings.
Handles CRUD operations, listing filters and cursor pagination rules.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import ValidationError as PydanticValidationError
from listing_api.repositories.property import PropertyRepository, PropertyFilters
from listing_api.models.property import Property
from listing_api.schemas.property import PropertyCreate, PropertyUpdate
from listing_api.schemas.error import field_errors_from_pydantic
from listing_api.utils.pagination import DEFAULT_LIMIT, INT32_MAX, INT32_MIN, MAX_LIMIT, clamp_limit, parse_int
from listing_api.utils.exceptions import (
    APIException,
    PropertyNotFoundError,
    ValidationError,
)
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for listing, reading and maintaining properties.
    Any authenticated user may create, update or delete a property.
    """

    def __init__(self, db_session: AsyncSession, default_limit: int = DEFAULT_LIMIT, max_limit: int = MAX_LIMIT):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.default_limit = default_limit
        self.max_limit = max_limit

    @staticmethod
    def filters_from_query(query: Mapping[str, Any]) -> PropertyFilters:
        """
        Build listing filters from raw query parameters.

        Numeric values that cannot be parsed are ignored, as is a blank
        property type.
        """
        property_type = query.get("property_type")
        if isinstance(property_type, str):
            property_type = property_type.strip() or None

        return PropertyFilters(
            property_type=property_type,
            min_bedrooms=parse_int(query.get("min_bedrooms"), INT32_MIN, INT32_MAX),
            max_bedrooms=parse_int(query.get("max_bedrooms"), INT32_MIN, INT32_MAX),
            min_price=parse_int(query.get("min_price"), INT32_MIN, INT32_MAX),
            max_price=parse_int(query.get("max_price"), INT32_MIN, INT32_MAX),
            cursor=parse_int(query.get("cursor")),
        )

    async def list_properties(
        self,
        filters: PropertyFilters,
        raw_limit: Any = None
    ) -> Tuple[List[Property], int, Optional[str]]:
        """
        Get one page of properties.

        Args:
            filters: Listing filters including the cursor
            raw_limit: Requested page size as received

        Returns:
            Tuple of (properties, effective limit, next cursor as a string or None)
        """
        limit = clamp_limit(raw_limit, default=self.default_limit, maximum=self.max_limit)
        properties, next_cursor = await self.property_repo.list_page(filters, limit)
        return properties, limit, str(next_cursor) if next_cursor is not None else None

    async def get_property(self, property_id: int) -> Property:
        """
        Get property by ID with its images.

        Args:
            property_id: ID of the property

        Returns:
            Property instance

        Raises:
            PropertyNotFoundError: If property doesn't exist
        """
        property_obj = await self.property_repo.get_with_images(property_id)
        if not property_obj:
            raise PropertyNotFoundError()

        logger.debug(f"Retrieved property: {property_id}")
        return property_obj

    async def create_property(self, params: Dict[str, Any]) -> Property:
        """
        Create a new property listing.

        Args:
            params: Unwrapped, permitted property attributes

        Returns:
            Created property instance

        Raises:
            ValidationError: If property data is invalid
        """
        try:
            property_data = PropertyCreate.model_validate(params)
        except PydanticValidationError as e:
            raise ValidationError.from_fields(field_errors_from_pydantic(e))

        try:
            property_obj = await self.property_repo.create_property(property_data.model_dump())
            return await self.get_property(property_obj.id)
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to create property: {e}")
            raise

    async def update_property(self, property_id: int, params: Dict[str, Any]) -> Property:
        """
        Update the supplied fields of a property.

        Args:
            property_id: ID of the property to update
            params: Unwrapped, permitted property attributes

        Returns:
            Updated property instance

        Raises:
            PropertyNotFoundError: If property doesn't exist
            ValidationError: If update data is invalid
        """
        existing_property = await self.get_property(property_id)

        try:
            property_data = PropertyUpdate.model_validate(params)
        except PydanticValidationError as e:
            raise ValidationError.from_fields(field_errors_from_pydantic(e))

        update_data = property_data.model_dump(exclude_unset=True)

        try:
            updated_property = await self.property_repo.update(existing_property, update_data)
            logger.info(f"Property updated: {property_id} ({', '.join(update_data) or 'no changes'})")
            return updated_property
        except Exception as e:
            logger.error(f"Failed to update property {property_id}: {e}")
            raise

    async def delete_property(self, property_id: int) -> None:
        """
        Delete a property together with its images, events and watchlist entries.

        Args:
            property_id: ID of the property to delete

        Raises:
            PropertyNotFoundError: If property doesn't exist
        """
        deleted = await self.property_repo.delete(property_id)
        if not deleted:
            raise PropertyNotFoundError()

        logger.info(f"Property deleted: {property_id}")
