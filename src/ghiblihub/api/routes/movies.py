"""Movie API endpoints."""

import logging
from collections import defaultdict

from fastapi import APIRouter, Depends, Query
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ghiblihub.api.dependencies import get_resolver
from ghiblihub.database import get_db
from ghiblihub.exceptions import InvalidArgumentError, NotFoundError
from ghiblihub.models import Movie, MovieStats
from ghiblihub.schemas import (
    AvailabilityOption,
    MovieDetailResponse,
    MovieResponse,
    MovieSearchResponse,
    MovieSearchResult,
    MovieStatsResponse,
    MovieWithAvailability,
    StatEventRequest,
    StatEventResponse,
)
from ghiblihub.services.availability import AvailabilityResolver

logger = logging.getLogger(__name__)
router = APIRouter()

SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 10


@router.get(
    "/movies",
    response_model=list[MovieWithAvailability] | list[MovieResponse],
)
async def get_movies(
    include_availability: bool = Query(
        False,
        alias="includeAvailability",
        description="Nest viewing options under each movie",
    ),
    region: str | None = Query(None, description="Restrict nested options to a region code"),
    db: AsyncSession = Depends(get_db),
    resolver: AvailabilityResolver = Depends(get_resolver),
) -> list[MovieWithAvailability] | list[MovieResponse]:
    """
    List all movies, newest first.

    With ``includeAvailability=true`` each movie carries its viewing options
    (ordered by region then platform), optionally restricted to ``region``.
    """
    result = await db.execute(select(Movie).order_by(Movie.year.desc(), Movie.title_en))
    movies = [MovieResponse.model_validate(m) for m in result.scalars().all()]

    if not include_availability:
        return movies

    by_movie: dict[str, list[AvailabilityOption]] = defaultdict(list)
    for option in await resolver.resolve_for_region(region):
        by_movie[option.movie_id].append(option)

    return [
        MovieWithAvailability(**movie.model_dump(), availabilities=by_movie.get(movie.id, []))
        for movie in movies
    ]


@router.get("/movies/search", response_model=MovieSearchResponse)
async def search_movies(
    q: str | None = Query(None, description="Title search string (2+ characters)"),
    db: AsyncSession = Depends(get_db),
) -> MovieSearchResponse:
    """
    Case-insensitive substring search over English, Japanese and Chinese titles.

    Queries shorter than two characters return no results without touching
    the database.
    """
    if not q or len(q) < SEARCH_MIN_LENGTH:
        return MovieSearchResponse(movies=[])

    pattern = f"%{q}%"
    stmt = (
        select(Movie)
        .where(
            or_(
                Movie.title_en.ilike(pattern),
                Movie.title_ja.ilike(pattern),
                Movie.title_zh.ilike(pattern),
            )
        )
        .order_by(Movie.year)
        .limit(SEARCH_LIMIT)
    )
    result = await db.execute(stmt)
    return MovieSearchResponse(
        movies=[MovieSearchResult.model_validate(m) for m in result.scalars().all()]
    )


@router.get("/movies/stats", response_model=MovieStatsResponse)
async def get_movie_stats(
    movie_id: str | None = Query(None, alias="movieId"),
    db: AsyncSession = Depends(get_db),
) -> MovieStatsResponse:
    """Engagement counters for a movie; all zero if nothing has been recorded."""
    if not movie_id:
        raise InvalidArgumentError("Missing movieId parameter")

    result = await db.execute(select(MovieStats).where(MovieStats.movie_id == movie_id))
    stats = result.scalar_one_or_none()
    if stats is None:
        return MovieStatsResponse()
    return MovieStatsResponse.model_validate(stats)


@router.post("/movies/stats", response_model=StatEventResponse)
async def record_movie_stat(
    event: StatEventRequest,
    resolver: AvailabilityResolver = Depends(get_resolver),
) -> StatEventResponse:
    """Record a view, favorite or share for a movie."""
    stats = await resolver.record_stat_event(event.movie_id, event.action)
    return StatEventResponse(success=True, stats=stats)


@router.get("/movies/{movie_id}", response_model=MovieDetailResponse)
async def get_movie(
    movie_id: str,
    region: str | None = Query(None, description="Restrict options to a region code"),
    db: AsyncSession = Depends(get_db),
    resolver: AvailabilityResolver = Depends(get_resolver),
) -> MovieDetailResponse:
    """Single movie with its viewing options and their freshness."""
    movie = await db.get(Movie, movie_id)
    if movie is None:
        logger.info(f"Movie {movie_id!r} not found")
        raise NotFoundError("Movie not found")

    availability = await resolver.resolve_for_movie(movie_id, region)
    return MovieDetailResponse(
        **MovieResponse.model_validate(movie).model_dump(),
        availabilities=availability.options,
        last_updated=availability.freshness,
    )
