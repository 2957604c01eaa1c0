"""Tests for the movies API endpoints."""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from ghiblihub.database import get_db
from ghiblihub.models import (
    Availability,
    AvailabilityType,
    Movie,
    MovieStats,
    Platform,
    PlatformType,
    Region,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_movie(id: str, title: str, year: int, title_ja: str = "タイトル") -> Movie:
    return Movie(
        id=id,
        tmdb_id=None,
        title_en=title,
        title_ja=title_ja,
        year=year,
        director="Hayao Miyazaki",
        poster_url=f"https://image.tmdb.org/t/p/w500/{id}.jpg",
    )


def make_availability(id: int, movie_id: str, region: Region, platform: Platform) -> Availability:
    return Availability(
        id=id,
        movie_id=movie_id,
        platform_id=platform.id,
        region_id=region.id,
        type=AvailabilityType.SUBSCRIPTION,
        last_checked=datetime(2024, 5, 1, tzinfo=timezone.utc),
        region=region,
        platform=platform,
    )


def scalars_result(rows: list) -> MagicMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


def override_with(db: AsyncMock):
    async def override() -> AsyncMock:
        yield db

    return override


JAPAN = Region(id="jp", code="JP", name="Japan")
NETFLIX = Platform(id="netflix", name="Netflix", type=PlatformType.STREAMING)
HBO = Platform(id="hbo-max", name="HBO Max", type=PlatformType.STREAMING)


# ---------------------------------------------------------------------------
# GET /api/movies
# ---------------------------------------------------------------------------


async def test_lists_movies(test_app: FastAPI) -> None:
    db = AsyncMock()
    db.execute = AsyncMock(return_value=scalars_result([
        make_movie("the-boy-and-the-heron-2023", "The Boy and the Heron", 2023),
        make_movie("spirited-away-2001", "Spirited Away", 2001),
    ]))
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/movies")

    assert response.status_code == 200
    data = response.json()
    assert [m["year"] for m in data] == [2023, 2001]
    assert data[0]["titleEn"] == "The Boy and the Heron"
    assert "availabilities" not in data[0]


async def test_lists_movies_with_nested_availability(test_app: FastAPI) -> None:
    movies = [
        make_movie("spirited-away-2001", "Spirited Away", 2001),
        make_movie("totoro-1988", "My Neighbor Totoro", 1988),
    ]
    options = [
        make_availability(1, "spirited-away-2001", JAPAN, NETFLIX),
        make_availability(2, "spirited-away-2001", JAPAN, HBO),
    ]
    db = AsyncMock()
    db.execute = AsyncMock(side_effect=[scalars_result(movies), scalars_result(options)])
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/movies?includeAvailability=true&region=JP")

    assert response.status_code == 200
    data = response.json()
    spirited, totoro = data
    assert [a["platform"]["name"] for a in spirited["availabilities"]] == ["HBO Max", "Netflix"]
    assert totoro["availabilities"] == []


# ---------------------------------------------------------------------------
# GET /api/movies/search
# ---------------------------------------------------------------------------


async def test_search_short_query_skips_database(test_app: FastAPI) -> None:
    db = AsyncMock()
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/movies/search?q=a")

    assert response.status_code == 200
    assert response.json() == {"movies": []}
    db.execute.assert_not_awaited()


async def test_search_returns_compact_results(test_app: FastAPI) -> None:
    db = AsyncMock()
    db.execute = AsyncMock(return_value=scalars_result([
        make_movie("totoro-1988", "My Neighbor Totoro", 1988, title_ja="となりのトトロ"),
    ]))
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/movies/search?q=totoro")

    assert response.status_code == 200
    movies = response.json()["movies"]
    assert movies == [
        {
            "id": "totoro-1988",
            "titleEn": "My Neighbor Totoro",
            "titleJa": "となりのトトロ",
            "year": 1988,
            "posterUrl": "https://image.tmdb.org/t/p/w500/totoro-1988.jpg",
        }
    ]


# ---------------------------------------------------------------------------
# GET /api/movies/{id}
# ---------------------------------------------------------------------------


async def test_movie_detail_includes_availability_and_freshness(test_app: FastAPI) -> None:
    db = AsyncMock()
    db.get = AsyncMock(return_value=make_movie("spirited-away-2001", "Spirited Away", 2001))
    db.execute = AsyncMock(return_value=scalars_result([
        make_availability(1, "spirited-away-2001", JAPAN, NETFLIX),
    ]))
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/movies/spirited-away-2001")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "spirited-away-2001"
    assert len(data["availabilities"]) == 1
    assert data["lastUpdated"].startswith("2024-05-01")


async def test_movie_detail_not_found(test_app: FastAPI) -> None:
    db = AsyncMock()
    db.get = AsyncMock(return_value=None)
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/movies/no-such-movie")

    assert response.status_code == 404
    assert response.json() == {"error": "Movie not found"}


async def test_movie_detail_with_unprovisioned_schema(test_app: FastAPI, capabilities) -> None:
    capabilities.ready = False
    db = AsyncMock()
    db.get = AsyncMock(return_value=make_movie("spirited-away-2001", "Spirited Away", 2001))
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/movies/spirited-away-2001")

    assert response.status_code == 200
    assert response.json()["availabilities"] == []
    assert response.json()["lastUpdated"] is None


# ---------------------------------------------------------------------------
# /api/movies/stats
# ---------------------------------------------------------------------------


async def test_stats_requires_movie_id(test_app: FastAPI) -> None:
    test_app.dependency_overrides[get_db] = override_with(AsyncMock())

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/movies/stats")

    assert response.status_code == 400
    assert response.json() == {"error": "Missing movieId parameter"}


async def test_stats_default_to_zero(test_app: FastAPI) -> None:
    db = AsyncMock()
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    db.execute = AsyncMock(return_value=result)
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/movies/stats?movieId=totoro-1988")

    assert response.status_code == 200
    assert response.json() == {
        "viewCount": 0,
        "favoriteCount": 0,
        "shareCount": 0,
        "lastViewed": None,
    }


async def test_stats_returns_stored_counters(test_app: FastAPI) -> None:
    db = AsyncMock()
    result = MagicMock()
    result.scalar_one_or_none.return_value = MovieStats(
        movie_id="totoro-1988", view_count=12, favorite_count=3, share_count=1
    )
    db.execute = AsyncMock(return_value=result)
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/movies/stats?movieId=totoro-1988")

    assert response.json()["viewCount"] == 12
    assert response.json()["favoriteCount"] == 3


async def test_record_view_event(test_app: FastAPI) -> None:
    db = AsyncMock()
    db.scalar = AsyncMock(return_value="totoro-1988")
    result = MagicMock()
    result.one.return_value = SimpleNamespace(
        view_count=1,
        favorite_count=0,
        share_count=0,
        last_viewed=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )
    db.execute = AsyncMock(return_value=result)
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.post(
            "/api/movies/stats", json={"movieId": "totoro-1988", "action": "view"}
        )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["stats"]["viewCount"] == 1


async def test_record_unknown_action_is_rejected(test_app: FastAPI) -> None:
    db = AsyncMock()
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.post(
            "/api/movies/stats", json={"movieId": "totoro-1988", "action": "bogus"}
        )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid action type"}
    db.execute.assert_not_awaited()


async def test_record_event_for_missing_movie(test_app: FastAPI) -> None:
    db = AsyncMock()
    db.scalar = AsyncMock(return_value=None)
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.post(
            "/api/movies/stats", json={"movieId": "no-such-movie", "action": "favorite"}
        )

    assert response.status_code == 404
    assert response.json() == {"error": "Movie not found"}


async def test_record_event_missing_body_fields(test_app: FastAPI) -> None:
    test_app.dependency_overrides[get_db] = override_with(AsyncMock())

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.post("/api/movies/stats", json={"action": "view"})

    assert response.status_code == 400
    assert "movieId" in response.json()["error"]


# ---------------------------------------------------------------------------
# Failure mapping
# ---------------------------------------------------------------------------


async def test_unreachable_store_returns_503(test_app: FastAPI) -> None:
    db = AsyncMock()
    db.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("refused")))
    test_app.dependency_overrides[get_db] = override_with(db)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/movies")

    assert response.status_code == 503
    assert response.json() == {"error": "Service temporarily unavailable"}


async def test_unexpected_error_returns_500(test_app: FastAPI) -> None:
    db = AsyncMock()
    db.execute = AsyncMock(side_effect=RuntimeError("boom"))
    test_app.dependency_overrides[get_db] = override_with(db)

    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/movies")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
