"""
Property event service for reading a listing's history.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from listing_api.models.event import PropertyEvent
from listing_api.repositories.event import PropertyEventRepository
from listing_api.repositories.property import PropertyRepository
from listing_api.schemas.event import format_event_data
from listing_api.utils.exceptions import PropertyNotFoundError
import logging

logger = logging.getLogger(__name__)


class PropertyEventService:
    """Reads events of existing properties, newest first."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.event_repo = PropertyEventRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def list_events(self, property_id: int) -> List[PropertyEvent]:
        """
        Events of a property.

        Raises:
            PropertyNotFoundError: If the property doesn't exist
        """
        if not await self.property_repo.exists(property_id):
            raise PropertyNotFoundError()

        return await self.event_repo.list_for_property(property_id)

    @staticmethod
    def serialize(event: PropertyEvent) -> dict:
        return {
            "id": event.id,
            "event_type": event.event_type,
            "data": event.data or {},
            "created_at": event.created_at,
            "display": format_event_data(event.event_type, event.data).model_dump(),
        }
