"""
Test configuration and fixtures for the Property Watch API.
Provides an application per test backed by in-memory SQLite, test data factories
and common test utilities.
"""

import pytest
import uuid
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Dict, Optional
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from listing_api.config import Settings
from listing_api.main import create_app
from listing_api.models.user import User
from listing_api.models.property import Property, PropertyType
from listing_api.models.image import PropertyImage
from listing_api.models.event import PropertyEvent
from listing_api.repositories.user import UserRepository
from listing_api.repositories.property import PropertyRepository
from listing_api.repositories.image import ImageRepository
from listing_api.repositories.event import PropertyEventRepository
from listing_api.repositories.watchlist import WatchListRepository
from listing_api.utils.auth import TokenCodec


TEST_SECRET_KEY = "test-secret-key-that-is-at-least-32-characters"
TEST_PASSWORD = "password123"


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an isolated in-memory database."""
    return Settings(
        environment="testing",
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key=TEST_SECRET_KEY,
        enable_request_logging=False,
        auto_create_tables=False,
    )


@pytest.fixture
async def app(test_settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """Application with its schema created; disposed after the test."""
    application = create_app(test_settings)
    await application.state.database.create_tables()
    yield application
    await application.state.database.dispose()


@pytest.fixture
async def db_session(app: FastAPI) -> AsyncGenerator[AsyncSession, None]:
    """Session on the application's database, separate from request sessions."""
    async with app.state.database.session_factory() as session:
        yield session


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client talking to the application in-process."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def token_codec(app: FastAPI) -> TokenCodec:
    return app.state.token_codec


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    """Create a user repository instance."""
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(db_session)


@pytest.fixture
def image_repository(db_session: AsyncSession) -> ImageRepository:
    """Create an image repository instance."""
    return ImageRepository(db_session)


@pytest.fixture
def event_repository(db_session: AsyncSession) -> PropertyEventRepository:
    """Create an event repository instance."""
    return PropertyEventRepository(db_session)


@pytest.fixture
def watchlist_repository(db_session: AsyncSession) -> WatchListRepository:
    """Create a watchlist repository instance."""
    return WatchListRepository(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(email: Optional[str] = None, password: str = TEST_PASSWORD) -> dict:
        """Create user data dictionary."""
        return {
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
        }

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        email: Optional[str] = None,
        password: str = TEST_PASSWORD
    ) -> User:
        """Create a test user in the database."""
        user_data = UserFactory.create_user_data(email=email, password=password)
        return await user_repo.create_user(user_data["email"], user_data["password"])


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        title: str = "Test Property",
        description: Optional[str] = "A beautiful test property",
        price: int = 500000,
        bedrooms: int = 2,
        property_type: str = PropertyType.HOUSE.value,
        status: str = "available",
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> dict:
        """Create property data dictionary."""
        return {
            "title": title,
            "description": description,
            "price": price,
            "bedrooms": bedrooms,
            "property_type": property_type,
            "status": status,
            "latitude": latitude,
            "longitude": longitude,
        }

    @staticmethod
    async def create_property(property_repo: PropertyRepository, **overrides) -> Property:
        """Create a test property in the database."""
        property_data = PropertyFactory.create_property_data(**overrides)
        return await property_repo.create_property(property_data)


class ImageFactory:
    """Factory for creating test property images."""

    @staticmethod
    async def create_image(
        image_repo: ImageRepository,
        property_id: int,
        url: Optional[str] = None,
        position: Optional[int] = None
    ) -> PropertyImage:
        """Create a test property image in the database."""
        url = url or f"https://images.example.com/{uuid.uuid4().hex}.jpg"
        return await image_repo.add_image(property_id, url, position=position)


class EventFactory:
    """Factory for creating test property events."""

    @staticmethod
    async def create_price_change(
        event_repo: PropertyEventRepository,
        property_id: int,
        old_price: int = 450000,
        new_price: int = 500000,
        created_at: Optional[datetime] = None
    ) -> PropertyEvent:
        return await event_repo.record_event(
            property_id,
            "price_changed",
            {"old_price": old_price, "new_price": new_price},
            created_at=created_at,
        )

    @staticmethod
    async def create_sale(
        event_repo: PropertyEventRepository,
        property_id: int,
        sold_price: int = 500000,
        sold_date: str = "2025-11-20",
        created_at: Optional[datetime] = None
    ) -> PropertyEvent:
        return await event_repo.record_event(
            property_id,
            "sold",
            {"sold_price": sold_price, "sold_date": sold_date},
            created_at=created_at,
        )


def days_ago(days: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=days)


# Common test fixtures
@pytest.fixture
async def test_user(user_repository: UserRepository) -> User:
    """Create a test user."""
    return await UserFactory.create_user(user_repository, email="bob.smith@example.com")


@pytest.fixture
async def other_user(user_repository: UserRepository) -> User:
    """Create a second test user."""
    return await UserFactory.create_user(user_repository, email="jane.citizen@example.com")


@pytest.fixture
async def test_property(property_repository: PropertyRepository) -> Property:
    """Create a test property."""
    return await PropertyFactory.create_property(
        property_repository,
        title="12 Collins Street, Melbourne",
        price=1650000,
        bedrooms=3,
    )


@pytest.fixture
def auth_headers(test_user: User, token_codec: TokenCodec) -> Dict[str, str]:
    """Bearer authorization headers for the test user."""
    return {"Authorization": f"Bearer {token_codec.encode(test_user.id)}"}


def auth_headers_for(token_codec: TokenCodec, user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token_codec.encode(user.id)}"}
