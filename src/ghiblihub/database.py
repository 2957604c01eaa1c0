"""Database connection and session management."""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ghiblihub.config import settings
from ghiblihub.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=False,  # Set to True for SQL query logging
    pool_pre_ping=True,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI to provide database sessions.

    The session is committed when the request handler returns and rolled back
    if it raises. Connection failures surface as ``StoreUnavailableError``.

    Usage:
        @app.get("/endpoint")
        async def endpoint(db: AsyncSession = Depends(get_db)):
            # Use db here
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except (OperationalError, InterfaceError) as e:
            logger.error(f"Database unavailable: {e}")
            await session.rollback()
            raise StoreUnavailableError("Service temporarily unavailable") from e
        except Exception:
            await session.rollback()
            raise
