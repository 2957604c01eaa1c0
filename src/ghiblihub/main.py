"""FastAPI application entry point."""

import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ghiblihub.api.errors import register_exception_handlers
from ghiblihub.api.routes import availability, characters, guides, health, movies, regions, search
from ghiblihub.config import settings
from ghiblihub.services.cache import result_cache
from ghiblihub.services.schema import probe_catalog_schema

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def purge_result_cache() -> None:
    """Drop expired entries from the shared result cache on the event loop."""
    result_cache.purge_expired()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: expire stale cache entries on a fixed interval
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        purge_result_cache,
        trigger=IntervalTrigger(minutes=settings.cache_purge_interval_minutes),
        id="cache_purge",
        name="Purge expired availability cache entries",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        f"Scheduler started, cache purge every {settings.cache_purge_interval_minutes} minutes"
    )

    # Probe the availability tables in the background
    asyncio.create_task(probe_catalog_schema())
    logger.info("Start-up schema probe triggered in background")

    yield

    scheduler.shutdown(wait=False)
    logger.info("Scheduler shut down")


app = FastAPI(
    title="GhibliHub API",
    description="Studio Ghibli catalog with streaming availability by region",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health.router, prefix="/api")
app.include_router(availability.router, prefix="/api", tags=["availability"])
app.include_router(movies.router, prefix="/api", tags=["movies"])
app.include_router(regions.router, prefix="/api", tags=["regions"])
app.include_router(characters.router, prefix="/api", tags=["characters"])
app.include_router(guides.router, prefix="/api", tags=["guides"])
app.include_router(search.router, prefix="/api", tags=["search"])


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    uvicorn.run("ghiblihub.main:app", host=settings.api_host, port=settings.api_port)
