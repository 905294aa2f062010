"""
User repository for authentication and account registration.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from listing_api.repositories.base import BaseRepository
from listing_api.models.user import User
from listing_api.utils.auth import hash_password, verify_password
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for user accounts keyed by normalized email."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, email: str, password: str) -> User:
        """
        Create a new user with a normalized email and a bcrypt password hash.

        Args:
            email: Email address (normalized to lower case before storing)
            password: Plain text password

        Returns:
            Created user instance

        Raises:
            IntegrityError: If the email is already taken
        """
        created_user = await self.create({
            "email": User.normalize_email(email),
            "hashed_password": hash_password(password),
        })
        logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
        return created_user

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address, ignoring case and surrounding whitespace.

        Args:
            email: Email address to search for

        Returns:
            User instance if found, None otherwise
        """
        try:
            query = select(User).where(User.email == User.normalize_email(email))
            result = await self.db.execute(query)
            user = result.scalar_one_or_none()

            if user:
                logger.debug(f"Retrieved user by email: {email}")
            else:
                logger.debug(f"User with email {email} not found")

            return user
        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {e}")
            raise

    async def email_exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate user with email and password.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            User instance if authentication successful, None otherwise
        """
        user = await self.get_by_email(email)
        if not user:
            logger.debug(f"Authentication failed: user {email} not found")
            return None

        if not verify_password(password, user.hashed_password):
            logger.debug(f"Authentication failed: invalid password for {email}")
            return None

        logger.debug(f"User authenticated: {email}")
        return user
