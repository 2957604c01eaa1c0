"""Pydantic schemas for API requests and responses."""

from ghiblihub.schemas.availability import (
    AvailabilityOption,
    MovieAvailability,
    MovieDetailResponse,
    MovieWithAvailability,
    PlatformResponse,
    PriceInfo,
    RegionResponse,
)
from ghiblihub.schemas.character import (
    CharacterAppearance,
    CharacterDetailResponse,
    CharacterListResponse,
    CharacterMovie,
    CharacterResponse,
)
from ghiblihub.schemas.guide import (
    GuideDetailResponse,
    GuideListResponse,
    GuideMovie,
    GuideMovieEntry,
    GuideSummary,
    RelatedGuide,
)
from ghiblihub.schemas.movie import (
    MovieResponse,
    MovieSearchResponse,
    MovieSearchResult,
    MovieSummary,
)
from ghiblihub.schemas.pagination import Pagination
from ghiblihub.schemas.search import QuickSearchResponse, QuickSearchResult
from ghiblihub.schemas.stats import MovieStatsResponse, StatEventRequest, StatEventResponse

__all__ = [
    "AvailabilityOption",
    "CharacterAppearance",
    "CharacterDetailResponse",
    "CharacterListResponse",
    "CharacterMovie",
    "CharacterResponse",
    "GuideDetailResponse",
    "GuideListResponse",
    "GuideMovie",
    "GuideMovieEntry",
    "GuideSummary",
    "MovieAvailability",
    "MovieDetailResponse",
    "MovieResponse",
    "MovieSearchResponse",
    "MovieSearchResult",
    "MovieStatsResponse",
    "MovieSummary",
    "MovieWithAvailability",
    "Pagination",
    "PlatformResponse",
    "PriceInfo",
    "QuickSearchResponse",
    "QuickSearchResult",
    "RegionResponse",
    "RelatedGuide",
    "StatEventRequest",
    "StatEventResponse",
]
