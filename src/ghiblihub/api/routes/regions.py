"""Region and platform reference-data endpoints."""

from fastapi import APIRouter, Depends

from ghiblihub.api.dependencies import get_resolver
from ghiblihub.schemas.availability import PlatformResponse, RegionResponse
from ghiblihub.services.availability import AvailabilityResolver

router = APIRouter()


@router.get("/regions", response_model=list[RegionResponse])
async def get_regions(
    resolver: AvailabilityResolver = Depends(get_resolver),
) -> list[RegionResponse]:
    """All regions, sorted by display name."""
    return await resolver.list_regions()


@router.get("/platforms", response_model=list[PlatformResponse])
async def get_platforms(
    resolver: AvailabilityResolver = Depends(get_resolver),
) -> list[PlatformResponse]:
    """All platforms, sorted by display name."""
    return await resolver.list_platforms()
