"""Seed script to populate reference regions and platforms."""

import asyncio
import logging

from sqlalchemy import select

from ghiblihub.database import AsyncSessionLocal
from ghiblihub.models import Platform, PlatformType, Region

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)

REGIONS = [
    {"code": "US", "name": "United States"},
    {"code": "JP", "name": "Japan"},
    {"code": "CN", "name": "China Mainland"},
    {"code": "HK", "name": "Hong Kong"},
    {"code": "TW", "name": "Taiwan"},
    {"code": "GB", "name": "United Kingdom"},
    {"code": "FR", "name": "France"},
    {"code": "DE", "name": "Germany"},
    {"code": "CA", "name": "Canada"},
    {"code": "AU", "name": "Australia"},
    {"code": "KR", "name": "South Korea"},
    {"code": "SG", "name": "Singapore"},
    {"code": "MY", "name": "Malaysia"},
]

PLATFORMS = [
    {
        "id": "netflix",
        "name": "Netflix",
        "website": "https://www.netflix.com",
        "type": PlatformType.STREAMING,
    },
    {
        "id": "disney-plus",
        "name": "Disney+",
        "website": "https://www.disneyplus.com",
        "type": PlatformType.STREAMING,
    },
    {
        "id": "hbo-max",
        "name": "HBO Max",
        "website": "https://www.hbomax.com",
        "type": PlatformType.STREAMING,
    },
    {
        "id": "amazon-prime-video",
        "name": "Amazon Prime Video",
        "website": "https://www.primevideo.com",
        "type": PlatformType.STREAMING,
    },
    {
        "id": "hulu",
        "name": "Hulu",
        "website": "https://www.hulu.com",
        "type": PlatformType.STREAMING,
    },
    {
        "id": "bilibili",
        "name": "哔哩哔哩",
        "website": "https://www.bilibili.com",
        "type": PlatformType.STREAMING,
    },
    {
        "id": "youku",
        "name": "优酷",
        "website": "https://www.youku.com",
        "type": PlatformType.STREAMING,
    },
    {
        "id": "tencent-video",
        "name": "腾讯视频",
        "website": "https://v.qq.com",
        "type": PlatformType.STREAMING,
    },
    {
        "id": "iqiyi",
        "name": "爱奇艺",
        "website": "https://www.iqiyi.com",
        "type": PlatformType.STREAMING,
    },
    {
        "id": "amazon-prime-video-jp",
        "name": "Amazon Prime Video JP",
        "website": "https://www.amazon.co.jp/primevideo",
        "type": PlatformType.STREAMING,
    },
    {
        "id": "u-next",
        "name": "U-NEXT",
        "website": "https://video.unext.jp",
        "type": PlatformType.STREAMING,
    },
    {
        "id": "apple-tv",
        "name": "iTunes/Apple TV",
        "website": "https://www.apple.com/apple-tv-app",
        "type": PlatformType.PURCHASE,
    },
    {
        "id": "google-play-movies",
        "name": "Google Play Movies",
        "website": "https://play.google.com/store/movies",
        "type": PlatformType.PURCHASE,
    },
    {
        "id": "youtube-movies",
        "name": "YouTube Movies",
        "website": "https://www.youtube.com/movies",
        "type": PlatformType.RENTAL,
    },
    {
        "id": "kanopy",
        "name": "Kanopy",
        "website": "https://www.kanopy.com",
        "type": PlatformType.FREE,
    },
    {
        "id": "hoopla",
        "name": "Hoopla",
        "website": "https://www.hoopladigital.com",
        "type": PlatformType.FREE,
    },
    {
        "id": "gkids",
        "name": "GKIDS",
        "website": "https://gkids.com/films",
        "type": PlatformType.PHYSICAL,
    },
    {
        "id": "shout-factory",
        "name": "Shout! Factory",
        "website": "https://www.shoutfactory.com",
        "type": PlatformType.PHYSICAL,
    },
]


async def seed_regions_platforms() -> None:
    """Insert missing regions and platforms; existing rows get their names refreshed."""
    async with AsyncSessionLocal() as session:
        for region_data in REGIONS:
            result = await session.execute(select(Region).where(Region.code == region_data["code"]))
            existing = result.scalar_one_or_none()

            if existing:
                existing.name = region_data["name"]
                continue

            session.add(Region(id=region_data["code"].lower(), **region_data))
            logger.info(f"Added region: {region_data['name']}")

        for platform_data in PLATFORMS:
            result = await session.execute(
                select(Platform).where(Platform.name == platform_data["name"])
            )
            existing = result.scalar_one_or_none()

            if existing:
                existing.website = platform_data["website"]
                existing.type = platform_data["type"]
                continue

            session.add(Platform(**platform_data))
            logger.info(f"Added platform: {platform_data['name']}")

        await session.commit()
        logger.info(f"Seeded {len(REGIONS)} regions and {len(PLATFORMS)} platforms")


if __name__ == "__main__":
    asyncio.run(seed_regions_platforms())
