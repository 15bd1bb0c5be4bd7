"""Abstract cache capability injected into the services."""

from abc import ABC, abstractmethod
from typing import Optional


class CacheBackend(ABC):
    """Key/value cache with per-entry TTL.

    Implementations raise DependencyError when the cache cannot be reached.
    Single-key operations are expected to be atomic.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None on a miss."""

    @abstractmethod
    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """Store value under key, expiring after ttl seconds (None = never)."""

    @abstractmethod
    async def delete(self, *keys: str) -> int:
        """Delete keys and return how many existed."""

    @abstractmethod
    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob-style pattern; return the count."""

    @abstractmethod
    async def ping(self) -> bool:
        pass
