"""Regional availability resolution.

Answers "where can I watch movie X (optionally in region Y)?" and "which
regions/platforms exist?", and records engagement events.

Every read path asks ``SchemaCapabilities`` whether the relations it needs
exist before building a query; when they do not, the result is empty rather
than an error. Results are ordered by region name then platform name using
plain string comparison, and ties keep the order the store returned.
"""

import logging
from collections.abc import Hashable, Sequence
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Select, and_, select
from sqlalchemy.dialects.postgresql import Insert, insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager, selectinload

from ghiblihub.config import settings
from ghiblihub.exceptions import InvalidArgumentError, NotFoundError
from ghiblihub.models import Availability, Movie, MovieStats, Platform, Region
from ghiblihub.schemas.availability import (
    AvailabilityOption,
    MovieAvailability,
    PlatformResponse,
    RegionResponse,
)
from ghiblihub.schemas.stats import MovieStatsResponse
from ghiblihub.services.cache import NullCache, ResultCache
from ghiblihub.services.schema import AVAILABILITY_TABLES, SchemaCapabilities

logger = logging.getLogger(__name__)

# Stat event kind -> counter column
STAT_COUNTERS = {
    "view": "view_count",
    "favorite": "favorite_count",
    "share": "share_count",
}


def build_availability_query(
    movie_id: str | None = None,
    region_code: str | None = None,
    platform_id: str | None = None,
) -> Select:
    """
    Select availability rows with platform, region and movie loaded.

    Filters are ANDed; an empty or missing value means "no restriction".
    Region codes are matched exactly (case-sensitive).
    """
    stmt = (
        select(Availability)
        .join(Availability.region)
        .join(Availability.platform)
        .options(
            contains_eager(Availability.region),
            contains_eager(Availability.platform),
            selectinload(Availability.movie),
        )
        .order_by(Region.name, Platform.name, Availability.id)
    )

    conditions = []
    if movie_id:
        conditions.append(Availability.movie_id == movie_id)
    if region_code:
        conditions.append(Region.code == region_code)
    if platform_id:
        conditions.append(Availability.platform_id == platform_id)
    if conditions:
        stmt = stmt.where(and_(*conditions))

    return stmt


def sort_availability(rows: Sequence[Availability]) -> list[Availability]:
    """Order by region name, then platform name; ``sorted`` is stable for ties."""
    return sorted(rows, key=lambda a: (a.region.name, a.platform.name))


def compute_freshness(rows: Sequence[Availability]) -> datetime | None:
    """Newest ``last_checked`` across rows, or None for an empty set."""
    checked = [row.last_checked for row in rows if row.last_checked is not None]
    return max(checked) if checked else None


def build_stat_upsert(movie_id: str, kind: str, now: datetime) -> Insert:
    """
    Single-statement insert-or-increment for one stat counter.

    Only the counter named by ``kind`` is touched on conflict, so concurrent
    events for the same movie accumulate in the database instead of
    overwriting each other.
    """
    counter = STAT_COUNTERS[kind]

    values: dict[str, Any] = {
        "movie_id": movie_id,
        "view_count": 0,
        "favorite_count": 0,
        "share_count": 0,
    }
    values[counter] = 1
    updates: dict[str, Any] = {
        counter: getattr(MovieStats, counter) + 1,
        "updated_at": now,
    }
    if kind == "view":
        values["last_viewed"] = now
        updates["last_viewed"] = now

    stmt = insert(MovieStats).values(**values)
    return stmt.on_conflict_do_update(
        index_elements=["movie_id"],
        set_=updates,
    ).returning(
        MovieStats.view_count,
        MovieStats.favorite_count,
        MovieStats.share_count,
        MovieStats.last_viewed,
    )


class AvailabilityResolver:
    """
    Read/aggregate service over movies, platforms, regions and availability.

    One instance per request: it holds the request's session, while the
    capability gate and the result cache are shared and injected.
    """

    def __init__(
        self,
        db: AsyncSession,
        capabilities: SchemaCapabilities,
        cache: ResultCache | None = None,
        cache_ttl_seconds: float = settings.cache_ttl_seconds,
    ) -> None:
        self.db = db
        self.capabilities = capabilities
        self.cache = cache if cache is not None else NullCache()
        self.cache_ttl_seconds = cache_ttl_seconds

    async def resolve_for_movie(
        self,
        movie_id: str,
        region_code: str | None = None,
        platform_id: str | None = None,
    ) -> MovieAvailability:
        """
        Viewing options for one movie, optionally restricted to a region and platform.

        Returns the ordered options and their freshness (newest
        ``last_checked``), or an empty result with no freshness when nothing
        matches or the availability schema is not provisioned.
        """
        if not movie_id:
            raise InvalidArgumentError("movieId is required")

        key = ("resolve_for_movie", movie_id, region_code or None, platform_id or None)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        if not await self._availability_ready():
            return MovieAvailability(options=[], freshness=None)

        rows = await self._fetch(
            build_availability_query(movie_id=movie_id, region_code=region_code, platform_id=platform_id)
        )
        result = MovieAvailability(
            options=[AvailabilityOption.model_validate(row) for row in sort_availability(rows)],
            freshness=compute_freshness(rows),
        )
        self._remember(key, result)
        return result

    async def resolve_for_region(
        self,
        region_code: str | None = None,
        movie_id: str | None = None,
        platform_id: str | None = None,
    ) -> list[AvailabilityOption]:
        """Viewing options in a region (all regions if omitted), optionally for one movie or platform."""
        key = ("resolve_for_region", region_code or None, movie_id or None, platform_id or None)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        if not await self._availability_ready():
            return []

        rows = await self._fetch(
            build_availability_query(movie_id=movie_id, region_code=region_code, platform_id=platform_id)
        )
        options = [AvailabilityOption.model_validate(row) for row in sort_availability(rows)]
        self._remember(key, options)
        return options

    async def list_regions(self) -> list[RegionResponse]:
        key = ("list_regions",)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        if not await self.capabilities.has_table(self.db, Region.__tablename__):
            return []

        rows = await self._fetch(select(Region).order_by(Region.name))
        regions = [
            RegionResponse.model_validate(r) for r in sorted(rows, key=lambda r: r.name)
        ]
        self._remember(key, regions)
        return regions

    async def list_platforms(self) -> list[PlatformResponse]:
        key = ("list_platforms",)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        if not await self.capabilities.has_table(self.db, Platform.__tablename__):
            return []

        rows = await self._fetch(select(Platform).order_by(Platform.name))
        platforms = [
            PlatformResponse.model_validate(p) for p in sorted(rows, key=lambda p: p.name)
        ]
        self._remember(key, platforms)
        return platforms

    async def record_stat_event(self, movie_id: str, kind: str) -> MovieStatsResponse:
        """
        Increment one counter for a movie, creating its stats row on first use.

        Raises:
            InvalidArgumentError: unknown ``kind`` or empty ``movie_id``
            NotFoundError: ``movie_id`` does not reference a movie
        """
        if kind not in STAT_COUNTERS:
            raise InvalidArgumentError("Invalid action type")
        if not movie_id:
            raise InvalidArgumentError("movieId is required")

        exists = await self.db.scalar(select(Movie.id).where(Movie.id == movie_id))
        if exists is None:
            raise NotFoundError("Movie not found")

        now = datetime.now(timezone.utc)
        result = await self.db.execute(build_stat_upsert(movie_id, kind, now))
        row = result.one()
        logger.debug(f"Recorded {kind} for {movie_id}")
        return MovieStatsResponse.model_validate(row)

    async def _availability_ready(self) -> bool:
        return await self.capabilities.require(self.db, *AVAILABILITY_TABLES)

    async def _fetch(self, stmt: Select) -> list[Any]:
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    def _remember(self, key: Hashable, value: Any) -> None:
        self.cache.set(key, value, self.cache_ttl_seconds)
