"""
Authentication service for login, token verification and user registration.
Handles JWT issuance through the injected token codec and account creation rules.
"""

from typing import Any, Dict, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from pydantic import ValidationError as PydanticValidationError
from listing_api.repositories.user import UserRepository
from listing_api.models.user import User
from listing_api.schemas.user import UserCreate
from listing_api.schemas.error import field_errors_from_pydantic
from listing_api.utils.auth import TokenCodec
from listing_api.utils.exceptions import (
    APIException,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationError,
)
import logging

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "has already been taken"


class AuthService:
    """
    Authentication service for managing credentials and bearer tokens.
    Login failures never reveal whether the email exists.
    """

    def __init__(self, db_session: AsyncSession, token_codec: TokenCodec):
        self.db = db_session
        self.token_codec = token_codec
        self.user_repo = UserRepository(db_session)

    async def authenticate_user(self, email: Any, password: Any) -> User:
        """
        Authenticate user with email and password.

        Args:
            email: User's email address, matched case-insensitively
            password: Plain text password

        Returns:
            Authenticated User object

        Raises:
            InvalidCredentialsError: If either value is missing or they do not match
        """
        if not isinstance(email, str) or not email.strip() or not isinstance(password, str) or not password:
            logger.warning("Login attempt with missing credentials")
            raise InvalidCredentialsError()

        user = await self.user_repo.authenticate_user(email, password)

        if not user:
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        logger.info(f"User authenticated successfully: {user.email}")
        return user

    async def login(self, email: Any, password: Any) -> Tuple[User, str]:
        """
        Authenticate user and issue a token.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            Tuple of (user, token)

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        user = await self.authenticate_user(email, password)
        token = self.token_codec.encode(user.id)
        return user, token

    async def get_current_user(self, token: str) -> User:
        """
        Resolve the user a bearer token was issued for.

        Args:
            token: JWT access token

        Returns:
            Current User object

        Raises:
            TokenExpiredError: If token is expired
            InvalidTokenError: If token is invalid
            UserNotFoundError: If the token's user no longer exists
        """
        payload = self.token_codec.decode(token)

        user = await self.user_repo.get_by_id(payload.user_id)
        if not user:
            logger.warning(f"Token presented for unknown user id {payload.user_id}")
            raise UserNotFoundError()

        return user

    async def create_user(self, params: Dict[str, Any]) -> User:
        """
        Register a new user.

        Args:
            params: Unwrapped user attributes (email, password)

        Returns:
            Created user instance

        Raises:
            ValidationError: With field-keyed messages for invalid, missing or
                duplicate values
        """
        try:
            user_data = UserCreate.model_validate(params)
        except PydanticValidationError as e:
            raise ValidationError.from_fields(field_errors_from_pydantic(e))

        try:
            if await self.user_repo.email_exists(user_data.email):
                raise ValidationError.from_fields({"email": [EMAIL_TAKEN]})

            user = await self.user_repo.create_user(user_data.email, user_data.password)
            logger.info(f"Registered user {user.email} (ID: {user.id})")
            return user

        except APIException:
            raise
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            logger.warning(f"Duplicate registration for {user_data.email} rejected by unique index")
            raise ValidationError.from_fields({"email": [EMAIL_TAKEN]})
        except Exception as e:
            logger.error(f"Failed to create user {user_data.email}: {e}")
            raise
