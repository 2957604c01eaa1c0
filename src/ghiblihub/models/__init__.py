"""SQLAlchemy ORM models."""

from ghiblihub.models.availability import Availability, AvailabilityType
from ghiblihub.models.base import Base
from ghiblihub.models.character import Character, MovieCharacter
from ghiblihub.models.movie import Movie
from ghiblihub.models.movie_stats import MovieStats
from ghiblihub.models.platform import Platform, PlatformType
from ghiblihub.models.region import Region
from ghiblihub.models.watch_guide import GuideType, WatchGuide, WatchGuideMovie

__all__ = [
    "Availability",
    "AvailabilityType",
    "Base",
    "Character",
    "GuideType",
    "Movie",
    "MovieCharacter",
    "MovieStats",
    "Platform",
    "PlatformType",
    "Region",
    "WatchGuide",
    "WatchGuideMovie",
]
