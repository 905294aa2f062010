#!/usr/bin/env python3
"""
Database management script.
Creates, drops and resets the schema and seeds demo data for local development.
"""

import asyncio
import sys
import random
import argparse
import logging
from datetime import datetime, timedelta, timezone

from listing_api.config import Settings, get_settings
from listing_api.database import Database
from listing_api.models.property import PropertyStatus, PropertyType
from listing_api.repositories.event import PropertyEventRepository
from listing_api.repositories.image import ImageRepository
from listing_api.repositories.property import PropertyRepository
from listing_api.repositories.user import UserRepository
from listing_api.repositories.watchlist import WatchListRepository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"
DEMO_EMAILS = [
    "bob.smith@example.com",
    "jane.citizen@example.com",
    "nathan.bellette@example.com",
]
CITIES = {
    "Melbourne": (-37.8136, 144.9631),
    "Sydney": (-33.8688, 151.2093),
    "Brisbane": (-27.4698, 153.0251),
    "Perth": (-31.9505, 115.8605),
    "Adelaide": (-34.9285, 138.6007),
}
STREETS = ["Collins", "George", "Queen", "Hay", "King William", "Chapel", "Oxford", "Brunswick"]
PROPERTY_COUNT = 50


class DatabaseManager:
    """Schema and seed operations against the configured database."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.database = Database(settings)

    async def create_tables(self) -> None:
        logger.info("Creating database tables")
        await self.database.create_tables()

    async def drop_tables(self) -> None:
        logger.warning("Dropping all database tables")
        await self.database.drop_tables()

    async def reset_database(self) -> None:
        """Reset the database by dropping, recreating and reseeding all tables."""
        logger.warning("Resetting database - all data will be lost!")
        await self.database.drop_tables()
        await self.database.create_tables()
        await self.seed_database()
        logger.info("Database reset completed")

    async def seed_database(self) -> None:
        """
        Seed the database with demo users, properties, images, watchlists and events.
        Skipped when the demo users already exist.
        """
        if self.settings.is_production:
            raise RuntimeError("Seeding is not allowed in production")

        logger.info("Seeding database with demo data")

        async with self.database.session_factory() as session:
            user_repo = UserRepository(session)
            if await user_repo.email_exists(DEMO_EMAILS[0]):
                logger.info("Demo users already exist, skipping seed")
                return

            property_repo = PropertyRepository(session)
            image_repo = ImageRepository(session)
            event_repo = PropertyEventRepository(session)
            watchlist_repo = WatchListRepository(session)

            users = [await user_repo.create_user(email, DEMO_PASSWORD) for email in DEMO_EMAILS]

            properties = []
            for index in range(PROPERTY_COUNT):
                property_obj = await property_repo.create_property(self._property_attributes(index))
                properties.append(property_obj)

                # Every other property gets a gallery
                if index % 2 == 0:
                    await image_repo.bulk_create([
                        {
                            "property_id": property_obj.id,
                            "url": f"https://picsum.photos/seed/property-{property_obj.id}-{position}/800/600",
                            "position": position,
                        }
                        for position in range(1, random.randint(2, 5) + 1)
                    ])

                await self._seed_events(event_repo, property_obj)

            for user in users:
                for property_obj in random.sample(properties, random.randint(2, 5)):
                    await watchlist_repo.add(user.id, property_obj.id)

            logger.info(f"Seeded {len(users)} users and {len(properties)} properties")
            logger.info(f"Demo login: any of {', '.join(DEMO_EMAILS)} with password {DEMO_PASSWORD}")

    @staticmethod
    def _property_attributes(index: int) -> dict:
        city = random.choice(list(CITIES))
        latitude, longitude = CITIES[city]
        property_type = random.choice(list(PropertyType))
        bedrooms = 0 if property_type == PropertyType.STUDIO else random.randint(1, 5)
        return {
            "title": f"{index + 1} {random.choice(STREETS)} Street, {city}",
            "description": f"A {bedrooms} bedroom {property_type.value} close to {city} CBD.",
            "price": random.randrange(300_000, 2_500_000, 5_000),
            "bedrooms": bedrooms,
            "property_type": property_type.value,
            "status": random.choice(list(PropertyStatus)).value,
            "latitude": round(latitude + random.uniform(-0.1, 0.1), 6),
            "longitude": round(longitude + random.uniform(-0.1, 0.1), 6),
            "published_at": datetime.now(timezone.utc) - timedelta(days=random.randint(1, 120)),
        }

    @staticmethod
    async def _seed_events(event_repo: PropertyEventRepository, property_obj) -> None:
        """Record 1-4 events, oldest first, ending at the property's current price."""
        count = random.randint(1, 4)
        price = property_obj.price
        when = datetime.now(timezone.utc) - timedelta(days=count * 14)

        for step in range(count):
            when += timedelta(days=random.randint(1, 14))
            if property_obj.status == PropertyStatus.SOLD.value and step == count - 1:
                await event_repo.record_event(
                    property_obj.id,
                    "sold",
                    {"sold_price": price, "sold_date": when.strftime("%Y-%m-%d")},
                    created_at=when,
                )
            else:
                old_price = price + random.randrange(5_000, 50_000, 5_000)
                await event_repo.record_event(
                    property_obj.id,
                    "price_changed",
                    {"old_price": old_price, "new_price": price},
                    created_at=when,
                )

    async def close(self) -> None:
        await self.database.dispose()


async def run_command(command: str) -> None:
    manager = DatabaseManager(get_settings())
    try:
        if command == "create-tables":
            await manager.create_tables()
        elif command == "drop-tables":
            await manager.drop_tables()
        elif command == "reset":
            await manager.reset_database()
        elif command == "seed":
            await manager.seed_database()
    finally:
        await manager.close()


def main():
    """Main CLI interface for database management."""
    parser = argparse.ArgumentParser(description="Property Watch database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create-tables", help="Create all tables")
    subparsers.add_parser("drop-tables", help="Drop all tables (development and testing only)")

    reset_parser = subparsers.add_parser("reset", help="Drop, recreate and seed (development and testing only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    subparsers.add_parser("seed", help="Seed demo users, properties, images, watchlists and events")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    if args.command == "reset" and not args.confirm:
        print("Database reset requires --confirm flag")
        return

    try:
        asyncio.run(run_command(args.command))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
