"""Pydantic schemas for watch guides."""

from datetime import datetime

from ghiblihub.models.watch_guide import GuideType
from ghiblihub.schemas.base import CamelModel
from ghiblihub.schemas.pagination import Pagination


class GuideMovie(CamelModel):
    id: str
    title_en: str
    title_ja: str
    title_zh: str | None = None
    year: int
    poster_url: str | None = None
    backdrop_url: str | None = None
    synopsis: str | None = None
    vote_average: float | None = None
    duration: int | None = None
    director: str | None = None
    tmdb_id: int | None = None


class GuideMovieEntry(CamelModel):
    order: int
    notes: str | None = None
    movie: GuideMovie


class GuideBase(CamelModel):
    id: str
    title: str
    description: str | None = None
    guide_type: GuideType
    content: dict | None = None
    language: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GuideSummary(GuideBase):
    movie_count: int
    movies: list[GuideMovieEntry]


class GuideListResponse(CamelModel):
    guides: list[GuideSummary]
    pagination: Pagination


class RelatedGuide(CamelModel):
    id: str
    title: str
    description: str | None = None
    guide_type: GuideType
    created_at: datetime | None = None
    cover_image: str | None = None


class GuideDetailResponse(GuideBase):
    movies: list[GuideMovieEntry]
    related_guides: list[RelatedGuide]
