"""
Tests for database models and their relationships.
"""

import pytest
from sqlalchemy import select, func

from listing_api.models.user import User
from listing_api.models.property import Property, PropertyStatus, PropertyType, format_price
from listing_api.models.image import PropertyImage
from listing_api.models.event import PropertyEvent
from listing_api.models.watchlist import WatchList
from listing_api.repositories.property import PropertyRepository
from tests.conftest import EventFactory, ImageFactory, PropertyFactory


class TestUserModel:
    """Test User model methods."""

    def test_normalize_email(self):
        assert User.normalize_email("  Bob.Smith@Example.COM ") == "bob.smith@example.com"

    def test_to_dict_excludes_password_hash(self):
        user = User(id=1, email="bob@example.com", hashed_password="hash")
        data = user.to_dict()

        assert data["id"] == 1
        assert data["email"] == "bob@example.com"
        assert "hashed_password" not in data
        assert "password" not in data

    @pytest.mark.asyncio
    async def test_timestamps_are_set(self, test_user: User):
        assert test_user.id is not None
        assert test_user.created_at is not None
        assert test_user.updated_at is not None


class TestPropertyModel:
    """Test Property model formatting and serialization."""

    @pytest.mark.parametrize(
        "price,expected",
        [
            (1650000, "$1,650,000"),
            (500, "$500"),
            (0, "$0"),
            (None, "$0"),
        ],
    )
    def test_format_price(self, price, expected):
        assert format_price(price) == expected

    def test_enums(self):
        assert {t.value for t in PropertyType} == {"house", "apartment", "townhouse", "unit", "studio"}
        assert {s.value for s in PropertyStatus} == {"available", "under_offer", "sold"}

    @pytest.mark.asyncio
    async def test_status_defaults_to_available(self, property_repository: PropertyRepository):
        property_obj = await property_repository.create_property({
            "title": "Default status",
            "price": 100000,
            "bedrooms": 1,
            "property_type": "unit",
        })

        assert property_obj.status == PropertyStatus.AVAILABLE.value

    @pytest.mark.asyncio
    async def test_to_dict_includes_formatted_price_and_ordered_images(
        self, property_repository, image_repository, test_property
    ):
        await ImageFactory.create_image(image_repository, test_property.id, url="https://img.example.com/b.jpg", position=2)
        await ImageFactory.create_image(image_repository, test_property.id, url="https://img.example.com/a.jpg", position=1)

        loaded = await property_repository.get_with_images(test_property.id)
        await property_repository.db.refresh(loaded, ["images"])
        data = loaded.to_dict()

        assert data["formatted_price"] == "$1,650,000"
        assert [image["url"] for image in data["property_images"]] == [
            "https://img.example.com/a.jpg",
            "https://img.example.com/b.jpg",
        ]
        assert set(data["property_images"][0]) == {"id", "url", "position"}

    @pytest.mark.asyncio
    async def test_to_dict_without_images(self, test_property: Property):
        data = test_property.to_dict(include_images=False)
        assert "property_images" not in data
        assert data["title"] == "12 Collins Street, Melbourne"


class TestCascadingDeletes:
    """Deletes cascade to the rows that belong to the deleted record and no further."""

    @pytest.mark.asyncio
    async def test_delete_property_removes_dependents(
        self, db_session, property_repository, image_repository, event_repository,
        watchlist_repository, test_user, test_property
    ):
        await ImageFactory.create_image(image_repository, test_property.id)
        await EventFactory.create_price_change(event_repository, test_property.id)
        await watchlist_repository.add(test_user.id, test_property.id)

        assert await property_repository.delete(test_property.id) is True

        for model in (PropertyImage, PropertyEvent, WatchList):
            result = await db_session.execute(
                select(func.count(model.id)).where(model.property_id == test_property.id)
            )
            assert result.scalar() == 0

        # The watching user is untouched
        result = await db_session.execute(select(func.count(User.id)).where(User.id == test_user.id))
        assert result.scalar() == 1

    @pytest.mark.asyncio
    async def test_delete_unrelated_property_keeps_others(self, property_repository, test_property):
        other = await PropertyFactory.create_property(property_repository, title="Other")

        await property_repository.delete(other.id)

        assert await property_repository.exists(test_property.id)
        assert not await property_repository.exists(other.id)

    @pytest.mark.asyncio
    async def test_delete_user_removes_only_watchlist_entries(
        self, db_session, user_repository, property_repository, watchlist_repository,
        test_user, other_user, test_property
    ):
        user_id, other_user_id, property_id = test_user.id, other_user.id, test_property.id
        await watchlist_repository.add(user_id, property_id)
        await watchlist_repository.add(other_user_id, property_id)

        assert await user_repository.delete(user_id) is True

        result = await db_session.execute(select(func.count(WatchList.id)).where(WatchList.user_id == user_id))
        assert result.scalar() == 0
        result = await db_session.execute(select(func.count(WatchList.id)).where(WatchList.user_id == other_user_id))
        assert result.scalar() == 1
        assert await property_repository.exists(property_id)
