"""
Repository for PropertyImage model operations.
Handles queries for a property's ordered image gallery.
"""

from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from listing_api.models.image import PropertyImage
from listing_api.repositories.base import BaseRepository


class ImageRepository(BaseRepository[PropertyImage]):
    """Repository for PropertyImage database operations."""

    def __init__(self, db_session: AsyncSession):
        super().__init__(PropertyImage, db_session)

    async def get_by_property_id(self, property_id: int) -> List[PropertyImage]:
        """
        Get all images for a specific property.

        Args:
            property_id: ID of the property

        Returns:
            List of property images ordered by position
        """
        query = (
            select(PropertyImage)
            .where(PropertyImage.property_id == property_id)
            .order_by(PropertyImage.position.asc(), PropertyImage.id.asc())
        )

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def add_image(self, property_id: int, url: str, position: Optional[int] = None) -> PropertyImage:
        """
        Attach an image URL to a property.

        Without an explicit position the image is appended after the
        current last one.
        """
        if position is None:
            query = select(func.max(PropertyImage.position)).where(PropertyImage.property_id == property_id)
            result = await self.db.execute(query)
            position = (result.scalar() or 0) + 1

        return await self.create({
            "property_id": property_id,
            "url": url,
            "position": position,
        })
