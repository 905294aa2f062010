"""
User model for password authentication.
Handles user accounts that can watch properties.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from listing_api.database import Base
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from listing_api.models.watchlist import WatchList


class User(Base):
    """
    User account identified by a unique, case-insensitive email address.
    Deleting a user removes the user's watchlist entries and nothing else.
    """

    __tablename__ = "users"

    # Stored lower-cased so the unique index is case-insensitive
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address, normalized to lower case"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    watch_lists: Mapped[List["WatchList"]] = relationship(
        "WatchList",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email={self.email})>"

    @staticmethod
    def normalize_email(email: str) -> str:
        return email.strip().lower()

    def to_dict(self) -> dict:
        """
        Convert user to dictionary (excluding the password hash).

        Returns:
            Dictionary representation of user
        """
        return {
            "id": self.id,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
