"""In-process cache backend.

Implements the same contract as the Redis client so services can run (and be
tested) without a Redis server. Entries expire lazily on access. Patterns use
the same glob syntax Redis SCAN MATCH understands.

Example:
    cache = MemoryCache()
    await cache.set("article:5", "{...}", ttl=300)
    await cache.delete_pattern("news:*")
"""

import time
import logging
from fnmatch import fnmatchcase
from typing import Callable, Dict, Optional, Tuple

from legis_news.cache.base import CacheBackend

logger = logging.getLogger(__name__)


class MemoryCache(CacheBackend):
    """Dictionary-backed cache with TTL support."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[str, Optional[float]]] = {}

    def _live(self, key: str) -> bool:
        entry = self._entries.get(key)
        if entry is None:
            return False
        _, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return False
        return True

    async def get(self, key: str) -> Optional[str]:
        if not self._live(key):
            logger.debug(f"Cache MISS: {key}")
            return None
        logger.debug(f"Cache HIT: {key}")
        return self._entries[key][0]

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        expires_at = self._clock() + ttl if ttl else None
        self._entries[key] = (value, expires_at)
        logger.debug(f"Cache SET: {key} (ttl={ttl})")
        return True

    async def delete(self, *keys: str) -> int:
        count = 0
        for key in keys:
            if self._live(key):
                del self._entries[key]
                count += 1
        logger.debug(f"Cache DELETE: {keys} (count={count})")
        return count

    async def delete_pattern(self, pattern: str) -> int:
        matched = [key for key in list(self._entries) if fnmatchcase(key, pattern)]
        return await self.delete(*matched)

    async def ping(self) -> bool:
        return True

    def keys(self):
        """Live keys, for inspection in tests and debugging."""
        return [key for key in list(self._entries) if self._live(key)]
