"""
FastAPI dependency injection utilities for authentication, settings and services.
Provides reusable dependencies for route protection and user extraction.
"""

from typing import Optional
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession
from listing_api.config import Settings
from listing_api.database import get_db
from listing_api.models.user import User
from listing_api.services.auth import AuthService
from listing_api.services.event import PropertyEventService
from listing_api.services.property import PropertyService
from listing_api.services.watchlist import WatchListService
from listing_api.utils.auth import TokenCodec, extract_token_from_header


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_token_codec(request: Request) -> TokenCodec:
    """Token codec built from the application's settings."""
    return request.app.state.token_codec


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    token_codec: TokenCodec = Depends(get_token_codec)
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        db: Database session
        token_codec: Application token codec

    Returns:
        AuthService instance
    """
    return AuthService(db, token_codec)


async def get_property_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> PropertyService:
    """
    Get property service instance configured with the pagination limits.

    Args:
        db: Database session
        settings: Application settings

    Returns:
        PropertyService instance
    """
    return PropertyService(db, default_limit=settings.default_page_size, max_limit=settings.max_page_size)


async def get_watchlist_service(db: AsyncSession = Depends(get_db)) -> WatchListService:
    return WatchListService(db)


async def get_event_service(db: AsyncSession = Depends(get_db)) -> PropertyEventService:
    return PropertyEventService(db)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated user from the bearer token.

    Args:
        authorization: Raw Authorization header
        auth_service: Authentication service

    Returns:
        Current User object

    Raises:
        MissingAuthorizationError: If no Authorization header was sent
        MalformedAuthorizationError: If it is not "Bearer <token>"
        TokenExpiredError: If token is expired
        InvalidTokenError: If token cannot be verified
        UserNotFoundError: If the token's user no longer exists
    """
    token = extract_token_from_header(authorization)
    return await auth_service.get_current_user(token)
