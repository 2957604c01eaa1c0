"""Time-boxed result cache for read queries.

The cache is passed explicitly to the services that use it, so its scope is
whatever the caller hands in: the process-wide instance below for the API,
a fresh ``TTLCache`` (or ``NullCache``) in tests.
"""

import logging
import time
from collections.abc import Callable, Hashable
from typing import Any, Protocol

from ghiblihub.config import settings

logger = logging.getLogger(__name__)


class ResultCache(Protocol):
    """Minimal get/set-with-TTL interface. ``get`` returns None on a miss."""

    def get(self, key: Hashable) -> Any | None: ...

    def set(self, key: Hashable, value: Any, ttl_seconds: float) -> None: ...


class TTLCache:
    """
    In-memory cache with per-entry expiry and a size bound.

    When full, the oldest inserted entry is evicted. Expired entries are
    dropped lazily on ``get`` and in bulk by ``purge_expired``.
    """

    def __init__(self, maxsize: int = 1024, clock: Callable[[], float] = time.monotonic) -> None:
        self.maxsize = maxsize
        self._clock = clock
        self._data: dict[Hashable, Any] = {}
        self._expires: dict[Hashable, float] = {}

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: Hashable) -> Any | None:
        expires = self._expires.get(key)
        if expires is None:
            return None
        if self._clock() >= expires:
            self.delete(key)
            return None
        return self._data.get(key)

    def set(self, key: Hashable, value: Any, ttl_seconds: float) -> None:
        if key not in self._data and len(self._data) >= self.maxsize:
            oldest = next(iter(self._data))
            self.delete(oldest)
        self._data[key] = value
        self._expires[key] = self._clock() + ttl_seconds

    def delete(self, key: Hashable) -> None:
        self._data.pop(key, None)
        self._expires.pop(key, None)

    def clear(self) -> None:
        self._data.clear()
        self._expires.clear()

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        expired = [key for key, expires in list(self._expires.items()) if now >= expires]
        for key in expired:
            self.delete(key)
        if expired:
            logger.debug(f"Purged {len(expired)} expired cache entries")
        return len(expired)


class NullCache:
    """Cache that never stores anything."""

    def get(self, key: Hashable) -> Any | None:
        return None

    def set(self, key: Hashable, value: Any, ttl_seconds: float) -> None:
        return None


# Process-wide cache used by the API
result_cache = TTLCache(maxsize=settings.cache_max_entries)
