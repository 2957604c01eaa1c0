"""Quick search across movies, characters and watch guides."""

import math

from fastapi import APIRouter, Depends, Query
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ghiblihub.api.dependencies import get_result_cache
from ghiblihub.api.routes.characters import character_filters
from ghiblihub.config import settings
from ghiblihub.database import get_db
from ghiblihub.models import Character, Movie, MovieCharacter, WatchGuide, WatchGuideMovie
from ghiblihub.schemas import QuickSearchResponse, QuickSearchResult
from ghiblihub.services.cache import ResultCache
from ghiblihub.utils.text import relevance_score

router = APIRouter()

QUICK_SEARCH_MIN_LENGTH = 2
SUGGESTION_LIMIT = 5

# Share of the result limit offered to each kind, in query order
MOVIE_SHARE = 0.6
CHARACTER_SHARE = 0.25
GUIDE_SHARE = 0.15


def movie_result(query: str, movie: Movie) -> QuickSearchResult:
    return QuickSearchResult(
        id=movie.id,
        type="movie",
        title=movie.title_en,
        subtitle=f"{movie.year} • {movie.director or 'Unknown Director'}",
        image_url=movie.poster_url,
        url=f"/movies/{movie.id}",
        relevance_score=relevance_score(
            query, [movie.title_en, movie.title_ja, movie.title_zh, movie.director]
        ),
    )


def character_result(query: str, character: Character) -> QuickSearchResult:
    appearances = sorted(character.movie_characters, key=lambda mc: mc.importance, reverse=True)
    first_movie = appearances[0].movie if appearances else None
    return QuickSearchResult(
        id=character.id,
        type="character",
        title=character.name,
        subtitle=f"Character • {first_movie.title_en}" if first_movie else "Character",
        image_url=character.image_url or (first_movie.poster_url if first_movie else None),
        url=f"/characters/{character.id}",
        relevance_score=relevance_score(
            query, [character.name, character.name_ja, character.name_zh]
        ),
    )


def guide_result(query: str, guide: WatchGuide) -> QuickSearchResult:
    entries = sorted(guide.movies, key=lambda e: e.order)
    return QuickSearchResult(
        id=guide.id,
        type="guide",
        title=guide.title,
        subtitle=f"Watch Guide • {guide.guide_type.value}",
        image_url=entries[0].movie.poster_url if entries else None,
        url=f"/guides/{guide.id}",
        relevance_score=relevance_score(query, [guide.title, guide.description]),
    )


def collect_suggestions(query: str, movies: list[Movie], characters: list[Character]) -> list[str]:
    """Titles, directors and names from the matches that start with the query."""
    query_lower = query.lower()
    candidates = []
    for movie in movies:
        candidates.extend([movie.title_en, movie.title_ja, movie.title_zh, movie.director])
    for character in characters:
        candidates.extend([character.name, character.name_ja, character.name_zh])

    suggestions: list[str] = []
    for candidate in candidates:
        if candidate and candidate.lower().startswith(query_lower) and candidate not in suggestions:
            suggestions.append(candidate)
    return suggestions[:SUGGESTION_LIMIT]


@router.get("/search/quick", response_model=QuickSearchResponse)
async def quick_search(
    q: str | None = Query(None, description="Search string (2+ characters)"),
    limit: int = Query(8, ge=1, le=20),
    db: AsyncSession = Depends(get_db),
    cache: ResultCache = Depends(get_result_cache),
) -> QuickSearchResponse:
    """
    Mixed results for a search-as-you-type box, best match first.

    Movies are searched first (titles and director), then characters and
    published guides while there is room under ``limit``. Queries shorter than
    two characters return nothing without touching the database.
    """
    if not q or len(q) < QUICK_SEARCH_MIN_LENGTH:
        return QuickSearchResponse(results=[], suggestions=[], total=0, query=q or "")

    key = ("quick_search", q, limit)
    cached = cache.get(key)
    if cached is not None:
        return cached

    pattern = f"%{q}%"
    results: list[QuickSearchResult] = []

    movie_stmt = (
        select(Movie)
        .where(
            or_(
                Movie.title_en.ilike(pattern),
                Movie.title_ja.ilike(pattern),
                Movie.title_zh.ilike(pattern),
                Movie.director.ilike(pattern),
            )
        )
        .order_by(Movie.year)
        .limit(math.ceil(limit * MOVIE_SHARE))
    )
    movies = list((await db.execute(movie_stmt)).scalars().all())
    results.extend(movie_result(q, m) for m in movies)

    characters: list[Character] = []
    if len(results) < limit:
        character_stmt = (
            select(Character)
            .where(*character_filters(q, None))
            .options(selectinload(Character.movie_characters).selectinload(MovieCharacter.movie))
            .order_by(Character.is_main_character.desc(), Character.name)
            .limit(math.ceil(limit * CHARACTER_SHARE))
        )
        characters = list((await db.execute(character_stmt)).scalars().all())
        results.extend(character_result(q, c) for c in characters)

    if len(results) < limit:
        guide_stmt = (
            select(WatchGuide)
            .where(
                WatchGuide.is_published.is_(True),
                or_(WatchGuide.title.ilike(pattern), WatchGuide.description.ilike(pattern)),
            )
            .options(selectinload(WatchGuide.movies).selectinload(WatchGuideMovie.movie))
            .order_by(WatchGuide.order.asc())
            .limit(math.ceil(limit * GUIDE_SHARE))
        )
        guides = (await db.execute(guide_stmt)).scalars().all()
        results.extend(guide_result(q, g) for g in guides)

    results.sort(key=lambda r: r.relevance_score, reverse=True)
    response = QuickSearchResponse(
        results=results[:limit],
        suggestions=collect_suggestions(q, movies, characters),
        total=len(results),
        query=q,
    )
    if response.results:
        cache.set(key, response, settings.cache_ttl_seconds)
    return response
