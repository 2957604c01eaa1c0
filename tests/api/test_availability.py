"""Tests for the availability and reference-data endpoints."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects import postgresql

from ghiblihub.database import get_db
from ghiblihub.models import Availability, AvailabilityType, Movie, Platform, PlatformType, Region

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_region(code: str, name: str) -> Region:
    return Region(id=code.lower(), code=code, name=name)


def make_platform(id: str, name: str) -> Platform:
    return Platform(id=id, name=name, website=f"https://{id}.example.com", type=PlatformType.STREAMING)


def make_availability(
    id: int,
    region: Region,
    platform: Platform,
    price_info: dict | None = None,
) -> Availability:
    return Availability(
        id=id,
        movie_id="spirited-away-2001",
        platform_id=platform.id,
        region_id=region.id,
        type=AvailabilityType.SUBSCRIPTION,
        url="https://example.com/watch",
        price_info=price_info,
        last_checked=datetime(2024, 5, 1, tzinfo=timezone.utc),
        region=region,
        platform=platform,
        movie=Movie(
            id="spirited-away-2001",
            title_en="Spirited Away",
            title_ja="千と千尋の神隠し",
            year=2001,
        ),
    )


def db_returning(rows: list):
    async def override() -> AsyncMock:
        db = AsyncMock()
        result = MagicMock()
        result.scalars.return_value.all.return_value = rows
        db.execute = AsyncMock(return_value=result)
        yield db

    return override


# ---------------------------------------------------------------------------
# GET /api/availability
# ---------------------------------------------------------------------------


async def test_availability_for_movie_is_ordered(test_app: FastAPI) -> None:
    us = make_region("US", "United States")
    jp = make_region("JP", "Japan")
    rows = [
        make_availability(1, us, make_platform("netflix", "Netflix")),
        make_availability(2, jp, make_platform("netflix", "Netflix")),
        make_availability(3, us, make_platform("hbo-max", "HBO Max")),
    ]
    test_app.dependency_overrides[get_db] = db_returning(rows)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/availability?movieId=spirited-away-2001")

    assert response.status_code == 200
    data = response.json()
    assert [(a["region"]["name"], a["platform"]["name"]) for a in data] == [
        ("Japan", "Netflix"),
        ("United States", "HBO Max"),
        ("United States", "Netflix"),
    ]


async def test_availability_response_uses_camel_case(test_app: FastAPI) -> None:
    row = make_availability(
        1,
        make_region("JP", "Japan"),
        make_platform("netflix", "Netflix"),
        price_info={"price": 3.99, "currency": "USD", "format": "HD", "subscription": "monthly"},
    )
    test_app.dependency_overrides[get_db] = db_returning([row])

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/availability?movieId=spirited-away-2001")

    item = response.json()[0]
    assert item["movieId"] == "spirited-away-2001"
    assert item["lastChecked"].startswith("2024-05-01")
    assert item["movie"]["titleEn"] == "Spirited Away"
    assert item["priceInfo"]["price"] == 3.99
    assert item["priceInfo"]["format"] == "HD"
    assert item["priceInfo"]["subscription"] == "monthly"


async def test_availability_degraded_schema_returns_empty_list(test_app: FastAPI, capabilities) -> None:
    capabilities.ready = False
    test_app.dependency_overrides[get_db] = db_returning([])

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/availability?movieId=spirited-away-2001")

    assert response.status_code == 200
    assert response.json() == []


async def test_availability_unknown_region_returns_empty_list(test_app: FastAPI) -> None:
    test_app.dependency_overrides[get_db] = db_returning([])

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/availability?region=ZZ")

    assert response.status_code == 200
    assert response.json() == []


async def test_availability_filters_by_platform(test_app: FastAPI) -> None:
    row = make_availability(1, make_region("JP", "Japan"), make_platform("netflix", "Netflix"))
    result = MagicMock()
    result.scalars.return_value.all.return_value = [row]
    db = AsyncMock()
    db.execute = AsyncMock(return_value=result)

    async def override() -> AsyncMock:
        yield db

    test_app.dependency_overrides[get_db] = override

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/availability?region=JP&platformId=netflix")

    assert response.status_code == 200
    assert [a["platformId"] for a in response.json()] == ["netflix"]
    compiled = db.execute.await_args.args[0].compile(dialect=postgresql.dialect())
    assert "availabilities.platform_id =" in str(compiled)
    assert "regions.code =" in str(compiled)
    assert "netflix" in compiled.params.values()


# ---------------------------------------------------------------------------
# GET /api/regions and /api/platforms
# ---------------------------------------------------------------------------


async def test_regions_sorted_by_name(test_app: FastAPI) -> None:
    rows = [make_region("US", "United States"), make_region("JP", "Japan")]
    test_app.dependency_overrides[get_db] = db_returning(rows)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/regions")

    assert response.status_code == 200
    assert [r["code"] for r in response.json()] == ["JP", "US"]


async def test_regions_empty_when_relation_missing(test_app: FastAPI, capabilities) -> None:
    capabilities.ready = False
    test_app.dependency_overrides[get_db] = db_returning([make_region("JP", "Japan")])

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/regions")

    assert response.status_code == 200
    assert response.json() == []


async def test_platforms_sorted_by_name(test_app: FastAPI) -> None:
    rows = [make_platform("netflix", "Netflix"), make_platform("hbo-max", "HBO Max")]
    test_app.dependency_overrides[get_db] = db_returning(rows)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/platforms")

    assert response.status_code == 200
    data = response.json()
    assert [p["name"] for p in data] == ["HBO Max", "Netflix"]
    assert data[0]["type"] == "STREAMING"
