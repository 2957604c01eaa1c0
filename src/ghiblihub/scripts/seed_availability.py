"""Seed script to populate availability offers for well-known films."""

import asyncio
import logging

from sqlalchemy import select

from ghiblihub.database import AsyncSessionLocal
from ghiblihub.models import Availability, AvailabilityType, Movie, Platform, Region

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)

# TMDb IDs
SPIRITED_AWAY = 129
PRINCESS_MONONOKE = 128
MY_NEIGHBOR_TOTORO = 8392
GRAVE_OF_THE_FIREFLIES = 12477
HOWLS_MOVING_CASTLE = 4935

AVAILABILITY_DATA = [
    {
        "tmdb_id": SPIRITED_AWAY,
        "platform": "HBO Max",
        "region": "United States",
        "type": AvailabilityType.SUBSCRIPTION,
        "url": "https://www.max.com/movies/spirited-away",
        "price_info": {"subscription": "$15.49/month"},
    },
    {
        "tmdb_id": SPIRITED_AWAY,
        "platform": "Netflix",
        "region": "United Kingdom",
        "type": AvailabilityType.SUBSCRIPTION,
        "url": "https://www.netflix.com/title/60023642",
        "price_info": {"subscription": "£10.99/month"},
    },
    {
        "tmdb_id": SPIRITED_AWAY,
        "platform": "iTunes/Apple TV",
        "region": "United States",
        "type": AvailabilityType.PURCHASE,
        "url": "https://tv.apple.com/movie/spirited-away",
        "price_info": {"price": 19.99, "currency": "USD", "format": "HD"},
    },
    {
        "tmdb_id": MY_NEIGHBOR_TOTORO,
        "platform": "HBO Max",
        "region": "United States",
        "type": AvailabilityType.SUBSCRIPTION,
        "url": "https://www.max.com/movies/my-neighbor-totoro",
        "price_info": {"subscription": "$15.49/month"},
    },
    {
        "tmdb_id": MY_NEIGHBOR_TOTORO,
        "platform": "Netflix",
        "region": "France",
        "type": AvailabilityType.SUBSCRIPTION,
        "url": "https://www.netflix.com/title/60032294",
        "price_info": {"subscription": "€13.49/month"},
    },
    {
        "tmdb_id": GRAVE_OF_THE_FIREFLIES,
        "platform": "Netflix",
        "region": "Japan",
        "type": AvailabilityType.SUBSCRIPTION,
        "url": "https://www.netflix.com/title/70021668",
        "price_info": {"subscription": "¥1490/month"},
    },
    {
        "tmdb_id": PRINCESS_MONONOKE,
        "platform": "YouTube Movies",
        "region": "Canada",
        "type": AvailabilityType.RENTAL,
        "url": "https://www.youtube.com/movies",
        "price_info": {"price": 4.99, "currency": "CAD", "format": "HD"},
    },
    {
        "tmdb_id": HOWLS_MOVING_CASTLE,
        "platform": "GKIDS",
        "region": "United States",
        "type": AvailabilityType.PURCHASE,
        "url": "https://gkids.com/films/howls-moving-castle/",
        "price_info": {"price": 29.98, "currency": "USD", "format": "4K"},
        "notes": "Steelbook Blu-ray",
    },
]


async def seed_availability() -> None:
    """Insert curated offers, skipping any already present or whose references are missing."""
    async with AsyncSessionLocal() as session:
        added = 0
        for entry in AVAILABILITY_DATA:
            movie = (
                await session.execute(select(Movie).where(Movie.tmdb_id == entry["tmdb_id"]))
            ).scalar_one_or_none()
            platform = (
                await session.execute(select(Platform).where(Platform.name == entry["platform"]))
            ).scalar_one_or_none()
            region = (
                await session.execute(select(Region).where(Region.name == entry["region"]))
            ).scalar_one_or_none()

            if movie is None or platform is None or region is None:
                logger.warning(
                    f"Skipping TMDb ID {entry['tmdb_id']} on {entry['platform']} "
                    f"in {entry['region']}: movie, platform or region not seeded"
                )
                continue

            query = select(Availability).where(
                Availability.movie_id == movie.id,
                Availability.platform_id == platform.id,
                Availability.region_id == region.id,
                Availability.type == entry["type"],
            )
            if (await session.execute(query)).scalar_one_or_none():
                logger.info(f"{movie.title_en} on {platform.name} ({region.code}) already exists, skipping")
                continue

            session.add(
                Availability(
                    movie_id=movie.id,
                    platform_id=platform.id,
                    region_id=region.id,
                    type=entry["type"],
                    url=entry["url"],
                    price_info=entry["price_info"],
                    notes=entry.get("notes"),
                )
            )
            added += 1
            logger.info(f"Added {movie.title_en} on {platform.name} ({region.code})")

        await session.commit()
        logger.info(f"Availability seeding complete, {added} offers added")


if __name__ == "__main__":
    asyncio.run(seed_availability())
