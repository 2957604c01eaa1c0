"""FastAPI dependencies shared by the route modules."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ghiblihub.database import get_db
from ghiblihub.services.availability import AvailabilityResolver
from ghiblihub.services.cache import ResultCache, result_cache
from ghiblihub.services.schema import SchemaCapabilities, schema_capabilities


def get_schema_capabilities() -> SchemaCapabilities:
    return schema_capabilities


def get_result_cache() -> ResultCache:
    return result_cache


async def get_resolver(
    db: AsyncSession = Depends(get_db),
    capabilities: SchemaCapabilities = Depends(get_schema_capabilities),
    cache: ResultCache = Depends(get_result_cache),
) -> AvailabilityResolver:
    return AvailabilityResolver(db, capabilities, cache)
