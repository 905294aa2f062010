"""
WatchList model linking users to the properties they follow.
"""

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from listing_api.database import Base, IdType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from listing_api.models.user import User
    from listing_api.models.property import Property


class WatchList(Base):
    """A (user, property) pair; each pair exists at most once."""

    __tablename__ = "watch_lists"
    __table_args__ = (
        UniqueConstraint("user_id", "property_id", name="uq_watch_lists_user_property"),
    )

    user_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    property_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="watch_lists",
    )

    property_rel: Mapped["Property"] = relationship(
        "Property",
        back_populates="watch_lists",
    )

    def __repr__(self) -> str:
        return f"<WatchList(id={self.id}, user_id={self.user_id}, property_id={self.property_id})>"
