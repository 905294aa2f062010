"""
Watchlist service for adding, listing and removing watched properties.
"""

from typing import Any, Dict, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from listing_api.models.property import Property
from listing_api.models.user import User
from listing_api.models.watchlist import WatchList
from listing_api.repositories.property import PropertyRepository
from listing_api.repositories.watchlist import WatchListRepository
from listing_api.utils.pagination import parse_int
from listing_api.utils.exceptions import (
    DuplicateWatchListEntryError,
    MissingParameterError,
    PropertyNotFoundError,
    WatchListEntryNotFoundError,
)
import logging

logger = logging.getLogger(__name__)


class WatchListService:
    """
    Manages the current user's watchlist.
    Entries of other users are indistinguishable from missing ones.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.watchlist_repo = WatchListRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def list_watched(self, user: User) -> List[Tuple[WatchList, Property]]:
        """
        Properties the user is watching, each with its watchlist entry.

        Args:
            user: Current user

        Returns:
            List of (entry, property) pairs in the order they were added
        """
        entries = await self.watchlist_repo.list_for_user(user.id)
        return [(entry, entry.property_rel) for entry in entries]

    async def add_property(self, user: User, params: Dict[str, Any]) -> Property:
        """
        Add a property to the user's watchlist.

        Args:
            user: Current user
            params: Unwrapped watchlist attributes containing property_id

        Returns:
            The watched property with its images

        Raises:
            MissingParameterError: If property_id is absent
            PropertyNotFoundError: If the property doesn't exist
            DuplicateWatchListEntryError: If the user already watches it
        """
        # A failed insert rolls back the session and expires user
        user_id = user.id
        property_id = parse_int(params.get("property_id"))
        if property_id is None:
            raise MissingParameterError("watchlist")

        property_obj = await self.property_repo.get_with_images(property_id)
        if not property_obj:
            raise PropertyNotFoundError()

        if await self.watchlist_repo.get_pair(user_id, property_id):
            logger.warning(f"User {user_id} already watches property {property_id}")
            raise DuplicateWatchListEntryError()

        try:
            await self.watchlist_repo.add(user_id, property_id)
        except IntegrityError:
            # A concurrent request inserted the same pair first
            logger.warning(f"Duplicate watchlist entry for user {user_id}, property {property_id} rejected by unique index")
            raise DuplicateWatchListEntryError()

        return property_obj

    async def remove_entry(self, user: User, entry_id: int) -> None:
        """
        Remove one of the user's watchlist entries.

        Args:
            user: Current user
            entry_id: ID of the watchlist entry

        Raises:
            WatchListEntryNotFoundError: If the entry is missing or not the user's
        """
        entry = await self.watchlist_repo.get_for_user(entry_id, user.id)
        if not entry:
            raise WatchListEntryNotFoundError()

        await self.watchlist_repo.remove(entry)
