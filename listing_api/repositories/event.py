"""
Repository for a property's event history.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from listing_api.models.event import PropertyEvent
from listing_api.repositories.base import BaseRepository
import logging

logger = logging.getLogger(__name__)


class PropertyEventRepository(BaseRepository[PropertyEvent]):
    """Append and read property events; events are never updated."""

    def __init__(self, db: AsyncSession):
        super().__init__(PropertyEvent, db)

    async def record_event(
        self,
        property_id: int,
        event_type: str,
        data: Optional[Dict[str, Any]] = None,
        created_at: Optional[datetime] = None,
    ) -> PropertyEvent:
        """
        Append an event to a property's history.

        Args:
            property_id: ID of the property
            event_type: Event tag, e.g. "price_changed"
            data: JSON payload; stored as given
            created_at: Optional timestamp, defaults to now

        Returns:
            Created event
        """
        event_data = {
            "property_id": property_id,
            "event_type": event_type,
            "data": data or {},
        }
        if created_at is not None:
            event_data["created_at"] = created_at

        event = await self.create(event_data)
        logger.info(f"Recorded {event_type} event for property {property_id} (ID: {event.id})")
        return event

    async def list_for_property(self, property_id: int) -> List[PropertyEvent]:
        """
        Events of one property, newest first.

        Args:
            property_id: ID of the property

        Returns:
            Events ordered by created_at descending
        """
        try:
            query = (
                select(PropertyEvent)
                .where(PropertyEvent.property_id == property_id)
                .order_by(PropertyEvent.created_at.desc(), PropertyEvent.id.desc())
            )
            result = await self.db.execute(query)
            events = list(result.scalars().all())
            logger.debug(f"Retrieved {len(events)} events for property {property_id}")
            return events
        except Exception as e:
            logger.error(f"Failed to list events for property {property_id}: {e}")
            raise
