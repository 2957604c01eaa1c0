"""Shared test fixtures."""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI

from ghiblihub.api.dependencies import get_result_cache, get_schema_capabilities
from ghiblihub.api.errors import register_exception_handlers
from ghiblihub.api.routes import availability, characters, guides, health, movies, regions, search
from ghiblihub.services.cache import NullCache


class FakeCapabilities:
    """Stands in for SchemaCapabilities without probing a database."""

    def __init__(self, ready: bool = True) -> None:
        self.ready = ready
        self.calls: list[str] = []

    async def has_table(self, db, table_name: str) -> bool:
        self.calls.append(table_name)
        return self.ready

    async def require(self, db, *table_names: str) -> bool:
        self.calls.extend(table_names)
        return self.ready


@pytest.fixture
def capabilities() -> FakeCapabilities:
    return FakeCapabilities()


@pytest.fixture
def test_app(capabilities: FakeCapabilities) -> Iterator[FastAPI]:
    """Minimal FastAPI app without the APScheduler lifespan, for API tests."""
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(health.router, prefix="/api")
    app.include_router(availability.router, prefix="/api")
    app.include_router(movies.router, prefix="/api")
    app.include_router(regions.router, prefix="/api")
    app.include_router(characters.router, prefix="/api")
    app.include_router(guides.router, prefix="/api")
    app.include_router(search.router, prefix="/api")

    app.dependency_overrides[get_schema_capabilities] = lambda: capabilities
    app.dependency_overrides[get_result_cache] = NullCache
    yield app
    app.dependency_overrides.clear()
