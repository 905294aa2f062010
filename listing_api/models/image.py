"""
PropertyImage model for listing photos.
Stores externally hosted image URLs ordered by position.
"""

from sqlalchemy import String, Integer, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from listing_api.database import Base, IdType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from listing_api.models.property import Property


class PropertyImage(Base):
    """Image reference belonging to exactly one property."""

    __tablename__ = "property_images"

    property_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the property this image belongs to"
    )

    url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        comment="Absolute URL of the hosted image"
    )

    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Display order within the property's gallery"
    )

    property_rel: Mapped["Property"] = relationship(
        "Property",
        back_populates="images",
    )

    def __repr__(self) -> str:
        return f"<PropertyImage(id={self.id}, property_id={self.property_id}, position={self.position})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "position": self.position,
        }


property_position_index = Index(
    "idx_property_images_property_position",
    PropertyImage.property_id,
    PropertyImage.position,
)
