"""Health check endpoint."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ghiblihub.database import get_db

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    """
    Health check endpoint.

    Runs a trivial query against the catalog database.

    Returns:
        200 with ``status: healthy`` when the database answers, otherwise 503
        with ``status: unhealthy``
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        await db.rollback()
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "timestamp": timestamp,
                "services": {"database": "disconnected", "api": "operational"},
                "error": "Database connection failed",
            },
        )

    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": timestamp,
            "services": {"database": "connected", "api": "operational"},
        },
    )
