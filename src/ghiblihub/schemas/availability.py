"""Pydantic schemas for platforms, regions and availability options."""

from datetime import datetime
from typing import Literal

from pydantic import ConfigDict

from ghiblihub.models.availability import AvailabilityType
from ghiblihub.models.platform import PlatformType
from ghiblihub.schemas.base import CamelModel
from ghiblihub.schemas.movie import MovieResponse, MovieSummary


class PlatformResponse(CamelModel):
    id: str
    name: str
    website: str | None = None
    type: PlatformType
    logo: str | None = None


class RegionResponse(CamelModel):
    id: str
    code: str
    name: str


class PriceInfo(CamelModel):
    """
    Price metadata attached to an availability row.

    The stored value is free-form JSON; the common keys are typed and any
    others are passed through untouched.
    """

    model_config = ConfigDict(extra="allow")

    price: float | None = None
    currency: str | None = None
    format: Literal["SD", "HD", "4K"] | None = None


class AvailabilityOption(CamelModel):
    """One way to watch a movie: platform + region + access type."""

    id: int
    movie_id: str
    platform_id: str
    region_id: str
    type: AvailabilityType
    url: str | None = None
    price_info: PriceInfo | None = None
    notes: str | None = None
    last_checked: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None

    platform: PlatformResponse
    region: RegionResponse
    movie: MovieSummary | None = None


class MovieAvailability(CamelModel):
    """Ordered options for one movie plus the newest last_checked among them."""

    options: list[AvailabilityOption]
    freshness: datetime | None = None


class MovieWithAvailability(MovieResponse):
    availabilities: list[AvailabilityOption]


class MovieDetailResponse(MovieResponse):
    """Single movie with its viewing options."""

    availabilities: list[AvailabilityOption]
    last_updated: datetime | None = None
