"""Tests for the quick search endpoint."""

from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from ghiblihub.api.dependencies import get_result_cache
from ghiblihub.database import get_db
from ghiblihub.models import Character, GuideType, Movie, MovieCharacter, WatchGuide, WatchGuideMovie
from ghiblihub.services.cache import TTLCache

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_movie(
    id: str = "my-neighbor-totoro-1988",
    title: str = "My Neighbor Totoro",
    year: int = 1988,
    director: str | None = "Hayao Miyazaki",
) -> Movie:
    return Movie(
        id=id,
        title_en=title,
        title_ja="となりのトトロ",
        year=year,
        director=director,
        poster_url=f"https://image.tmdb.org/t/p/w500/{id}.jpg",
    )


def make_character(id: str, name: str, movie: Movie | None = None) -> Character:
    character = Character(id=id, name=name, name_ja=None, image_url=None, is_main_character=True)
    if movie is not None:
        MovieCharacter(movie_id=movie.id, character_id=id, movie=movie, character=character, importance=10)
    return character


def make_guide(id: str, title: str, movie: Movie | None = None) -> WatchGuide:
    guide = WatchGuide(
        id=id,
        title=title,
        description="Start here",
        guide_type=GuideType.BEGINNER,
        is_published=True,
        order=0,
    )
    if movie is not None:
        guide.movies.append(WatchGuideMovie(order=1, movie=movie, movie_id=movie.id))
    return guide


def scalars_result(rows: list) -> MagicMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


def override_with(db: AsyncMock):
    async def override() -> AsyncMock:
        yield db

    return override


TOTORO = make_movie()


# ---------------------------------------------------------------------------
# GET /api/search/quick
# ---------------------------------------------------------------------------


async def test_short_query_returns_empty_without_query(test_app: FastAPI) -> None:
    db = AsyncMock()
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/search/quick?q=t")

    assert response.status_code == 200
    assert response.json() == {"results": [], "suggestions": [], "total": 0, "query": "t"}
    db.execute.assert_not_awaited()


async def test_mixed_results_sorted_by_relevance(test_app: FastAPI) -> None:
    db = AsyncMock()
    db.execute = AsyncMock(
        side_effect=[
            scalars_result([TOTORO]),
            scalars_result([make_character("totoro", "Totoro", TOTORO)]),
            scalars_result([make_guide("totoro-and-friends", "Totoro and friends", TOTORO)]),
        ]
    )
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/search/quick?q=totoro")

    assert response.status_code == 200
    data = response.json()
    assert data["query"] == "totoro"
    assert data["total"] == 3
    assert [(r["type"], r["id"]) for r in data["results"]] == [
        ("character", "totoro"),
        ("guide", "totoro-and-friends"),
        ("movie", "my-neighbor-totoro-1988"),
    ]
    character, guide, movie = data["results"]
    assert character["relevanceScore"] == 100
    assert character["subtitle"] == "Character • My Neighbor Totoro"
    assert character["imageUrl"] == TOTORO.poster_url
    assert character["url"] == "/characters/totoro"
    assert guide["subtitle"] == "Watch Guide • BEGINNER"
    assert guide["imageUrl"] == TOTORO.poster_url
    assert movie["subtitle"] == "1988 • Hayao Miyazaki"
    assert movie["url"] == "/movies/my-neighbor-totoro-1988"
    assert data["suggestions"] == ["Totoro"]


async def test_movie_search_includes_director(test_app: FastAPI) -> None:
    db = AsyncMock()
    db.execute = AsyncMock(side_effect=[scalars_result([TOTORO]), scalars_result([]), scalars_result([])])
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/search/quick?q=miyazaki")

    assert response.status_code == 200
    movie_stmt = str(db.execute.await_args_list[0].args[0])
    assert "movies.director" in movie_stmt
    guide_stmt = str(db.execute.await_args_list[2].args[0])
    assert "watch_guides.is_published" in guide_stmt
    assert response.json()["results"][0]["subtitle"] == "1988 • Hayao Miyazaki"


async def test_full_page_of_movies_skips_other_kinds(test_app: FastAPI) -> None:
    movies = [
        make_movie("castle-in-the-sky-1986", "Castle in the Sky", 1986),
        make_movie("howls-moving-castle-2004", "Howl's Moving Castle", 2004),
    ]
    db = AsyncMock()
    db.execute = AsyncMock(return_value=scalars_result(movies))
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/search/quick?q=castle&limit=2")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [r["id"] for r in data["results"]] == ["castle-in-the-sky-1986", "howls-moving-castle-2004"]
    assert data["suggestions"] == ["Castle in the Sky"]
    assert db.execute.await_count == 1


async def test_limit_above_twenty_is_rejected(test_app: FastAPI) -> None:
    test_app.dependency_overrides[get_db] = override_with(AsyncMock())

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/search/quick?q=totoro&limit=50")

    assert response.status_code == 400
    assert "limit" in response.json()["error"]


async def test_results_are_cached(test_app: FastAPI) -> None:
    db = AsyncMock()
    db.execute = AsyncMock(side_effect=[scalars_result([TOTORO]), scalars_result([]), scalars_result([])])
    test_app.dependency_overrides[get_db] = override_with(db)
    cache = TTLCache()
    test_app.dependency_overrides[get_result_cache] = lambda: cache

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        first = await client.get("/api/search/quick?q=totoro")
        second = await client.get("/api/search/quick?q=totoro")

    assert first.json() == second.json()
    assert db.execute.await_count == 3
