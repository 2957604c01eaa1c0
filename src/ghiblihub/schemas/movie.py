"""Pydantic schemas for movie data."""

from datetime import datetime

from ghiblihub.schemas.base import CamelModel


class MovieSummary(CamelModel):
    """Compact movie reference nested in availability and character payloads."""

    id: str
    title_en: str
    title_ja: str
    title_zh: str | None = None
    year: int
    poster_url: str | None = None


class MovieSearchResult(CamelModel):
    id: str
    title_en: str
    title_ja: str
    year: int
    poster_url: str | None = None


class MovieSearchResponse(CamelModel):
    movies: list[MovieSearchResult]


class MovieResponse(CamelModel):
    """Movie response schema."""

    id: str
    tmdb_id: int | None = None
    title_en: str
    title_ja: str
    title_zh: str | None = None
    year: int
    director: str | None = None
    duration: int | None = None
    synopsis: str | None = None
    poster_url: str | None = None
    backdrop_url: str | None = None
    vote_average: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
