"""
Property model for real-estate listings.
Handles listing data, pricing and the relationships that are removed with a listing.
"""

from sqlalchemy import String, Text, Integer, Numeric, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from listing_api.database import Base
from datetime import datetime
from decimal import Decimal
import enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from listing_api.models.user import User
    from listing_api.models.image import PropertyImage
    from listing_api.models.event import PropertyEvent
    from listing_api.models.watchlist import WatchList


class PropertyType(str, enum.Enum):
    """Kinds of dwelling a listing can describe."""
    HOUSE = "house"
    APARTMENT = "apartment"
    TOWNHOUSE = "townhouse"
    UNIT = "unit"
    STUDIO = "studio"


class PropertyStatus(str, enum.Enum):
    """Sale status of a listing."""
    AVAILABLE = "available"
    UNDER_OFFER = "under_offer"
    SOLD = "sold"


def format_price(price: Optional[int]) -> str:
    """Render a whole-unit price with thousands separators, e.g. "$1,650,000"."""
    return f"${price or 0:,}"


class Property(Base):
    """
    Property listing with price, bedrooms, type, status and coordinates.
    Owns its images, events and watchlist entries; all are deleted with it.
    """

    __tablename__ = "properties"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property listing title"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Detailed property description"
    )

    # Whole currency units
    price: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Property price in whole currency units"
    )

    bedrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Number of bedrooms"
    )

    property_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
        comment="house, apartment, townhouse, unit or studio"
    )

    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=PropertyStatus.AVAILABLE.value,
        index=True,
        comment="available, under_offer or sold"
    )

    latitude: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=10, scale=6),
        nullable=True,
        comment="Property latitude coordinate"
    )

    longitude: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=10, scale=6),
        nullable=True,
        comment="Property longitude coordinate"
    )

    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="When the listing went public"
    )

    # Relationships
    images: Mapped[List["PropertyImage"]] = relationship(
        "PropertyImage",
        back_populates="property_rel",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PropertyImage.position.asc()"
    )

    events: Mapped[List["PropertyEvent"]] = relationship(
        "PropertyEvent",
        back_populates="property_rel",
        cascade="all, delete-orphan",
    )

    watch_lists: Mapped[List["WatchList"]] = relationship(
        "WatchList",
        back_populates="property_rel",
        cascade="all, delete-orphan",
    )

    watchers: Mapped[List["User"]] = relationship(
        "User",
        secondary="watch_lists",
        viewonly=True,
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price})>"

    @property
    def formatted_price(self) -> str:
        return format_price(self.price)

    def to_dict(self, include_images: bool = True) -> dict:
        """
        Convert property to its JSON representation.

        Args:
            include_images: Whether to include the ordered image list

        Returns:
            Dictionary representation of property
        """
        result = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "formatted_price": self.formatted_price,
            "bedrooms": self.bedrooms,
            "property_type": self.property_type,
            "status": self.status,
            "latitude": float(self.latitude) if self.latitude is not None else None,
            "longitude": float(self.longitude) if self.longitude is not None else None,
            "published_at": self.published_at.isoformat() if self.published_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

        if include_images:
            result["property_images"] = [image.to_dict() for image in self.images]

        return result


# Composite index for the most common listing filter combination
type_bedrooms_price_index = Index(
    "idx_properties_type_bedrooms_price",
    Property.property_type,
    Property.bedrooms,
    Property.price,
)
