"""
Repository for users' watchlist entries.
All lookups are scoped to the owning user.
"""

from typing import List, Optional
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from listing_api.models.property import Property
from listing_api.models.watchlist import WatchList
from listing_api.repositories.base import BaseRepository
import logging

logger = logging.getLogger(__name__)


class WatchListRepository(BaseRepository[WatchList]):
    """Repository for (user, property) watchlist pairs."""

    def __init__(self, db: AsyncSession):
        super().__init__(WatchList, db)

    async def list_for_user(self, user_id: int) -> List[WatchList]:
        """
        Watchlist entries of a user with each property and its images loaded.

        Args:
            user_id: ID of the owning user

        Returns:
            Entries ordered by when they were added
        """
        try:
            query = (
                select(WatchList)
                .options(selectinload(WatchList.property_rel).selectinload(Property.images))
                .where(WatchList.user_id == user_id)
                .order_by(WatchList.id.asc())
            )
            result = await self.db.execute(query)
            entries = list(result.scalars().all())
            logger.debug(f"Retrieved {len(entries)} watchlist entries for user {user_id}")
            return entries
        except Exception as e:
            logger.error(f"Failed to list watchlist for user {user_id}: {e}")
            raise

    async def get_for_user(self, entry_id: int, user_id: int) -> Optional[WatchList]:
        """Entry by id, only if it belongs to the given user."""
        query = select(WatchList).where(
            and_(WatchList.id == entry_id, WatchList.user_id == user_id)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_pair(self, user_id: int, property_id: int) -> Optional[WatchList]:
        query = select(WatchList).where(
            and_(WatchList.user_id == user_id, WatchList.property_id == property_id)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def add(self, user_id: int, property_id: int) -> WatchList:
        """
        Create a watchlist entry.

        Raises:
            IntegrityError: If the pair already exists
        """
        entry = await self.create({"user_id": user_id, "property_id": property_id})
        logger.info(f"User {user_id} is now watching property {property_id} (entry {entry.id})")
        return entry

    async def remove(self, entry: WatchList) -> None:
        try:
            await self.db.delete(entry)
            await self.db.commit()
            logger.info(f"Removed watchlist entry {entry.id} for user {entry.user_id}")
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to remove watchlist entry {entry.id}: {e}")
            raise
