"""Availability API endpoints."""

from fastapi import APIRouter, Depends, Query

from ghiblihub.api.dependencies import get_resolver
from ghiblihub.schemas.availability import AvailabilityOption
from ghiblihub.services.availability import AvailabilityResolver

router = APIRouter()


@router.get("/availability", response_model=list[AvailabilityOption])
async def get_availability(
    movie_id: str | None = Query(None, alias="movieId", description="Restrict to one movie"),
    region: str | None = Query(None, description="Region code, e.g. US or JP (exact match)"),
    platform_id: str | None = Query(None, alias="platformId", description="Restrict to one platform"),
    resolver: AvailabilityResolver = Depends(get_resolver),
) -> list[AvailabilityOption]:
    """
    List viewing options, ordered by region name then platform name.

    Returns an empty list (not an error) when the availability tables have not
    been created yet.
    """
    if movie_id:
        result = await resolver.resolve_for_movie(movie_id, region, platform_id)
        return result.options
    return await resolver.resolve_for_region(region, platform_id=platform_id)
