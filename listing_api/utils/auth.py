"""
Authentication utilities for JWT token management and password hashing.
Provides a settings-driven token codec and bcrypt password helpers.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from listing_api.config import Settings
from listing_api.utils.exceptions import (
    InvalidTokenError,
    MalformedAuthorizationError,
    MissingAuthorizationError,
    TokenExpiredError,
)


# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenPayload:
    """Decoded JWT claims."""

    def __init__(self, user_id: int, exp: datetime):
        self.user_id = user_id
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from a decoded claims dictionary."""
        user_id = data.get("user_id")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise InvalidTokenError("missing user_id claim")
        return cls(
            user_id=user_id,
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc)
        )


class TokenCodec:
    """
    Signs and verifies bearer tokens carrying a user id and an expiry.
    Built once from Settings and shared by every request of an application.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 24 * 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_delta = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )

    def encode(self, user_id: int, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a signed token for a user.

        Args:
            user_id: ID of the authenticated user
            expires_delta: Optional lifetime overriding the configured one

        Returns:
            Encoded JWT token string
        """
        expire = datetime.now(timezone.utc) + (expires_delta if expires_delta is not None else self.expire_delta)
        to_encode = {
            "user_id": user_id,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenPayload:
        """
        Verify signature and expiry and return the token's claims.

        Args:
            token: JWT token string

        Returns:
            TokenPayload with the user id

        Raises:
            TokenExpiredError: If the expiry claim is in the past
            InvalidTokenError: For any other decoding or verification failure
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as e:
            raise InvalidTokenError(str(e))

        if "exp" not in payload:
            raise InvalidTokenError("missing exp claim")

        return TokenPayload.from_dict(payload)


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify password against hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password from database

    Returns:
        True if password matches, False otherwise
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unparseable hash or over-long password
        return False


def extract_token_from_header(authorization: Optional[str]) -> str:
    """
    Extract JWT token from Authorization header.

    Args:
        authorization: Authorization header value

    Returns:
        JWT token string

    Raises:
        MissingAuthorizationError: If the header is absent
        MalformedAuthorizationError: If the header is not "Bearer <token>"
    """
    if not authorization:
        raise MissingAuthorizationError()

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise MalformedAuthorizationError()
    return parts[1]
