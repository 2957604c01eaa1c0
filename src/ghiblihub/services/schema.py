"""Schema capability detection.

Platforms, regions and availabilities were added to the catalog after the
first deployment, so the API must keep answering while a database has not been
migrated yet. ``SchemaCapabilities`` probes whether a relation is queryable and
remembers the answer, so read paths can check a flag instead of paying a round
trip on every request.
"""

import logging
import time
from collections.abc import Callable

from sqlalchemy import literal, select, table
from sqlalchemy.exc import ProgrammingError
from sqlalchemy.ext.asyncio import AsyncSession

from ghiblihub.config import settings
from ghiblihub.database import AsyncSessionLocal
from ghiblihub.models import Availability, Platform, Region

logger = logging.getLogger(__name__)

AVAILABILITY_TABLES = (
    Availability.__tablename__,
    Platform.__tablename__,
    Region.__tablename__,
)


class SchemaCapabilities:
    """
    Per-process record of which relations exist.

    A relation found present is trusted for the life of the process. A
    relation found absent is re-probed once ``retry_after_seconds`` have
    passed, so a migration applied while the app is running is picked up
    without a restart.
    """

    def __init__(
        self,
        retry_after_seconds: float = settings.schema_probe_retry_seconds,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.retry_after_seconds = retry_after_seconds
        self._clock = clock
        self._present: set[str] = set()
        self._absent_since: dict[str, float] = {}

    async def has_table(self, db: AsyncSession, table_name: str) -> bool:
        if table_name in self._present:
            return True

        checked_at = self._absent_since.get(table_name)
        if checked_at is not None and self._clock() - checked_at < self.retry_after_seconds:
            return False

        if await self._probe(db, table_name):
            self._present.add(table_name)
            self._absent_since.pop(table_name, None)
            return True

        logger.info(f"Relation {table_name!r} has not been created yet, serving empty results")
        self._absent_since[table_name] = self._clock()
        return False

    async def require(self, db: AsyncSession, *table_names: str) -> bool:
        """True only if every named relation is queryable."""
        for table_name in table_names:
            if not await self.has_table(db, table_name):
                return False
        return True

    def reset(self) -> None:
        self._present.clear()
        self._absent_since.clear()

    async def _probe(self, db: AsyncSession, table_name: str) -> bool:
        # SAVEPOINT so a failed probe does not abort the request transaction
        stmt = select(literal(1)).select_from(table(table_name)).limit(1)
        try:
            async with db.begin_nested():
                await db.execute(stmt)
        except ProgrammingError:
            return False
        return True


# Process-wide capabilities used by the API
schema_capabilities = SchemaCapabilities()


async def probe_catalog_schema() -> None:
    """Warm ``schema_capabilities`` at start-up using a dedicated session."""
    try:
        async with AsyncSessionLocal() as db:
            ready = await schema_capabilities.require(db, *AVAILABILITY_TABLES)
    except Exception as e:
        logger.error(f"Start-up schema probe failed: {e}")
        return

    if ready:
        logger.info("Availability schema is provisioned")
    else:
        logger.warning("Availability schema is not provisioned; availability endpoints will be empty")
