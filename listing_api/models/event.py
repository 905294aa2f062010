"""
PropertyEvent model for a listing's append-only history.
Each event carries a type tag and an opaque JSON payload.
"""

from sqlalchemy import String, JSON, ForeignKey, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from listing_api.database import Base, IdType
from typing import Any, Dict, TYPE_CHECKING

if TYPE_CHECKING:
    from listing_api.models.property import Property


class PropertyEvent(Base):
    """
    Historical event on a property, e.g. price_changed or sold.
    Events are written once and read newest first.
    """

    __tablename__ = "property_events"

    property_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the property this event belongs to"
    )

    event_type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Free-form event tag such as price_changed or sold"
    )

    data: Mapped[Dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"),
        nullable=False,
        default=dict,
        comment="Event payload, shape depends on event_type"
    )

    property_rel: Mapped["Property"] = relationship(
        "Property",
        back_populates="events",
    )

    def __repr__(self) -> str:
        return f"<PropertyEvent(id={self.id}, property_id={self.property_id}, event_type={self.event_type})>"


property_created_index = Index(
    "idx_property_events_property_created",
    PropertyEvent.property_id,
    PropertyEvent.created_at.desc(),
)
