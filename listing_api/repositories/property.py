"""
Property repository for listings, filtering and cursor pagination.
The listing query is built by a single explicit function from a filter value object.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import Select, select, and_
from sqlalchemy.orm import selectinload
from listing_api.repositories.base import BaseRepository
from listing_api.models.property import Property
from typing import Optional, List, Dict, Any, Tuple
import logging

logger = logging.getLogger(__name__)


class PropertyFilters:
    """
    Filters accepted by the property listing.

    Every field is optional; bounds are inclusive and may be given on one
    side only. ``cursor`` is the id of the last property already seen.
    """

    def __init__(
        self,
        property_type: Optional[str] = None,
        min_bedrooms: Optional[int] = None,
        max_bedrooms: Optional[int] = None,
        min_price: Optional[int] = None,
        max_price: Optional[int] = None,
        cursor: Optional[int] = None,
    ):
        self.property_type = property_type or None
        self.min_bedrooms = min_bedrooms
        self.max_bedrooms = max_bedrooms
        self.min_price = min_price
        self.max_price = max_price
        self.cursor = cursor

    def after(self, cursor: int) -> "PropertyFilters":
        """Same filters positioned after another cursor."""
        return PropertyFilters(
            property_type=self.property_type,
            min_bedrooms=self.min_bedrooms,
            max_bedrooms=self.max_bedrooms,
            min_price=self.min_price,
            max_price=self.max_price,
            cursor=cursor,
        )

    def __repr__(self) -> str:
        return (
            f"PropertyFilters(property_type={self.property_type!r}, "
            f"bedrooms=[{self.min_bedrooms}, {self.max_bedrooms}], "
            f"price=[{self.min_price}, {self.max_price}], cursor={self.cursor})"
        )


def build_filter_conditions(filters: PropertyFilters) -> list:
    """Translate filters into SQL conditions; absent filters add nothing."""
    conditions = []

    if filters.property_type is not None:
        conditions.append(Property.property_type == filters.property_type)

    if filters.min_bedrooms is not None:
        conditions.append(Property.bedrooms >= filters.min_bedrooms)
    if filters.max_bedrooms is not None:
        conditions.append(Property.bedrooms <= filters.max_bedrooms)

    if filters.min_price is not None:
        conditions.append(Property.price >= filters.min_price)
    if filters.max_price is not None:
        conditions.append(Property.price <= filters.max_price)

    if filters.cursor is not None:
        conditions.append(Property.id > filters.cursor)

    return conditions


def build_listing_query(filters: PropertyFilters) -> Select:
    """
    Fully specified listing query: images eager-loaded, all filters ANDed,
    ordered by ascending id and positioned after the cursor when given.
    """
    query = select(Property).options(selectinload(Property.images))

    conditions = build_filter_conditions(filters)
    if conditions:
        query = query.where(and_(*conditions))

    return query.order_by(Property.id.asc())


class PropertyRepository(BaseRepository[Property]):
    """Repository for property listings."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Create a new property.

        Args:
            property_data: Validated property attributes

        Returns:
            Created property with its (empty) image list loaded
        """
        created_property = await self.create(property_data)
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return created_property

    async def get_with_images(self, property_id: int) -> Optional[Property]:
        """
        Get a property with its images ordered by position.

        Args:
            property_id: ID of the property

        Returns:
            Property or None if not found
        """
        try:
            query = (
                select(Property)
                .options(selectinload(Property.images))
                .where(Property.id == property_id)
            )
            result = await self.db.execute(query)
            property_obj = result.scalar_one_or_none()

            if property_obj:
                logger.debug(f"Retrieved property with images: {property_id}")

            return property_obj
        except Exception as e:
            logger.error(f"Failed to get property {property_id}: {e}")
            raise

    async def list_page(self, filters: PropertyFilters, limit: int) -> Tuple[List[Property], Optional[int]]:
        """
        Fetch one page of the filtered listing.

        Args:
            filters: Listing filters, including the cursor
            limit: Effective (already clamped) page size

        Returns:
            Tuple of (properties, next cursor). The next cursor is the last id
            on the page, given only when the page is full and at least one
            more matching property exists.
        """
        try:
            query = build_listing_query(filters).limit(limit)
            result = await self.db.execute(query)
            properties = list(result.scalars().all())

            next_cursor = None
            if properties and len(properties) == limit:
                last_id = properties[-1].id
                if await self.has_more(filters, last_id):
                    next_cursor = last_id

            logger.debug(f"Listed {len(properties)} properties with {filters!r}, next cursor: {next_cursor}")
            return properties, next_cursor
        except Exception as e:
            logger.error(f"Failed to list properties with {filters!r}: {e}")
            raise

    async def has_more(self, filters: PropertyFilters, last_id: int) -> bool:
        """Whether any property matching the filters has an id above ``last_id``."""
        conditions = build_filter_conditions(filters.after(last_id))
        query = select(select(Property.id).where(and_(*conditions)).exists())
        result = await self.db.execute(query)
        return bool(result.scalar())
