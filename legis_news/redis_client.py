"""Async Redis client wrapper with connection pooling and error handling.

This module owns the process-wide redis.asyncio connection pool and the
AsyncRedisClient that adapts it to the CacheBackend interface used by the
services.

Architecture:
    - Singleton pool (one per application), created at FastAPI startup
    - AsyncRedisClient: CacheBackend over the pool; every Redis failure is
      logged and raised as DependencyError
    - Pattern deletes walk the keyspace with SCAN instead of KEYS

Usage:
    # In FastAPI startup event
    await init_redis_pool()

    # In application code
    cache = AsyncRedisClient(get_redis_pool())
    await cache.set("article:5", payload, ttl=300)
    value = await cache.get("article:5")

    # In FastAPI shutdown event
    await close_redis_pool()
"""

import os
import time
import logging
from datetime import datetime, timezone
from typing import Optional

from redis import asyncio as aioredis
from redis.exceptions import RedisError
from dotenv import load_dotenv

from legis_news.cache.base import CacheBackend
from legis_news.errors import DependencyError

load_dotenv()

logger = logging.getLogger(__name__)

# Number of keys requested per SCAN round trip during pattern deletes
SCAN_BATCH_SIZE = 500


class RedisConfig:
    """Configuration for Redis connection pool.

    Loads settings from environment variables with sensible defaults.
    """

    def __init__(self):
        """Initialize Redis configuration from environment variables."""
        self.host = os.getenv("REDIS_HOST", "localhost")
        self.port = int(os.getenv("REDIS_PORT", "6379"))
        self.db = int(os.getenv("REDIS_DB", "0"))
        self.password = os.getenv("REDIS_PASSWORD", None)
        self.max_connections = int(os.getenv("REDIS_MAX_CONNECTIONS", "10"))
        self.socket_timeout = int(os.getenv("REDIS_SOCKET_TIMEOUT", "5"))
        self.socket_connect_timeout = int(os.getenv("REDIS_SOCKET_CONNECT_TIMEOUT", "5"))
        self.retry_on_timeout = os.getenv("REDIS_RETRY_ON_TIMEOUT", "true").lower() == "true"

    def get_url(self) -> str:
        """Build the redis:// URL for this configuration."""
        url = "redis://"
        if self.password:
            url += f":{self.password}@"
        return url + f"{self.host}:{self.port}/{self.db}"

    def __repr__(self) -> str:
        """String representation (safe - no password)."""
        return (
            f"RedisConfig("
            f"host={self.host}, "
            f"port={self.port}, "
            f"db={self.db}, "
            f"max_connections={self.max_connections})"
        )


# Global async Redis pool singleton
_redis_pool: Optional[aioredis.Redis] = None
_redis_config: Optional[RedisConfig] = None


class AsyncRedisClient(CacheBackend):
    """CacheBackend backed by a redis.asyncio client.

    Example:
        client = AsyncRedisClient(get_redis_pool())

        await client.set("key", "value", ttl=300)
        value = await client.get("key")
        await client.delete("key")
        await client.delete_pattern("news:*")
    """

    def __init__(self, redis_client: aioredis.Redis):
        """Initialize async Redis client.

        Args:
            redis_client: Async Redis client instance with connection pool
        """
        self.client = redis_client

    async def ping(self) -> bool:
        """Check if Redis server is reachable.

        Raises:
            DependencyError: If the server does not answer
        """
        try:
            return await self.client.ping()
        except (RedisError, OSError) as e:
            logger.error(f"Redis ping failed: {e}")
            raise DependencyError(f"Redis unavailable: {e}") from e

    async def get(self, key: str) -> Optional[str]:
        """Get value from Redis.

        Returns:
            Value if found, None otherwise

        Raises:
            DependencyError: If the GET fails
        """
        try:
            value = await self.client.get(key)
        except (RedisError, OSError) as e:
            logger.error(f"Redis GET failed for key '{key}': {e}")
            raise DependencyError(f"Redis GET failed: {e}") from e

        if value is not None:
            logger.debug(f"Cache HIT: {key}")
        else:
            logger.debug(f"Cache MISS: {key}")
        return value

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """Set value in Redis with optional TTL.

        Args:
            key: Cache key
            value: Value to store
            ttl: Time-to-live in seconds (None = no expiration)

        Raises:
            DependencyError: If the SET fails
        """
        try:
            if ttl:
                await self.client.setex(key, ttl, value)
            else:
                await self.client.set(key, value)
        except (RedisError, OSError) as e:
            logger.error(f"Redis SET failed for key '{key}': {e}")
            raise DependencyError(f"Redis SET failed: {e}") from e

        logger.debug(f"Cache SET: {key} (ttl={ttl})")
        return True

    async def delete(self, *keys: str) -> int:
        """Delete one or more keys from Redis.

        Returns:
            Number of keys deleted (0 for keys that did not exist)

        Raises:
            DependencyError: If the DEL fails
        """
        if not keys:
            return 0
        try:
            count = await self.client.delete(*keys)
        except (RedisError, OSError) as e:
            logger.error(f"Redis DELETE failed for keys {keys}: {e}")
            raise DependencyError(f"Redis DELETE failed: {e}") from e

        logger.debug(f"Cache DELETE: {keys} (count={count})")
        return count

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching a pattern.

        Keys are collected with SCAN MATCH and removed in batches, so the
        server is never blocked by a full KEYS walk.

        Raises:
            DependencyError: If SCAN or DEL fails
        """
        deleted = 0
        batch = []
        try:
            async for key in self.client.scan_iter(match=pattern, count=SCAN_BATCH_SIZE):
                batch.append(key)
                if len(batch) >= SCAN_BATCH_SIZE:
                    deleted += await self.client.delete(*batch)
                    batch = []
            if batch:
                deleted += await self.client.delete(*batch)
        except (RedisError, OSError) as e:
            logger.error(f"Redis pattern delete failed for '{pattern}': {e}")
            raise DependencyError(f"Redis pattern delete failed: {e}") from e

        logger.debug(f"Cache DELETE pattern: {pattern} (count={deleted})")
        return deleted


async def init_redis_pool() -> aioredis.Redis:
    """Initialize the global async Redis connection pool.

    Should be called once during FastAPI startup event.

    Returns:
        aioredis.Redis: The initialized Redis client with connection pool

    Raises:
        DependencyError: If the server cannot be reached

    Notes:
        - Safe to call multiple times (returns existing pool if already initialized)
        - Connections are created on-demand up to max_connections
    """
    global _redis_pool, _redis_config

    if _redis_pool is not None:
        logger.info("Redis pool already initialized, returning existing pool")
        return _redis_pool

    _redis_config = RedisConfig()
    logger.info(f"Initializing Redis pool with config: {_redis_config}")

    try:
        _redis_pool = aioredis.from_url(
            _redis_config.get_url(),
            max_connections=_redis_config.max_connections,
            socket_timeout=_redis_config.socket_timeout,
            socket_connect_timeout=_redis_config.socket_connect_timeout,
            retry_on_timeout=_redis_config.retry_on_timeout,
            decode_responses=True,  # Return strings instead of bytes
        )

        # Test the connection
        await _redis_pool.ping()
        logger.info("Redis pool initialized successfully")
        logger.info(f"  Redis server: {_redis_config.host}:{_redis_config.port}")
        logger.info(f"  Max connections: {_redis_config.max_connections}")

        return _redis_pool

    except (RedisError, OSError) as e:
        logger.error(f"Failed to initialize Redis pool: {e}", exc_info=True)
        _redis_pool = None
        _redis_config = None
        raise DependencyError(f"Redis connection failed: {e}") from e


def get_redis_pool() -> aioredis.Redis:
    """Get the global async Redis connection pool.

    Raises:
        RuntimeError: If pool has not been initialized (call init_redis_pool() first)
    """
    if _redis_pool is None:
        raise RuntimeError(
            "Redis pool has not been initialized. "
            "Call init_redis_pool() during application startup."
        )
    return _redis_pool


async def close_redis_pool():
    """Close the global async Redis connection pool.

    Should be called once during FastAPI shutdown event.
    """
    global _redis_pool, _redis_config

    if _redis_pool is None:
        logger.info("Redis pool is not initialized, nothing to close")
        return

    try:
        await _redis_pool.aclose()
        logger.info("Redis pool closed successfully")
    except (RedisError, OSError) as e:
        logger.error(f"Error closing Redis pool: {e}", exc_info=True)
    finally:
        _redis_pool = None
        _redis_config = None


async def check_redis_health() -> dict:
    """
    Round-trip a sentinel key through Redis and time it.

    Returns:
        dict: status ("ok" / "error"), responseTime, timestamp

    Raises:
        DependencyError: If the pool is missing or Redis fails
    """
    if _redis_pool is None:
        raise DependencyError("Redis pool not initialized")

    try:
        started = time.perf_counter()
        await _redis_pool.set("health_check", "ok")
        value = await _redis_pool.get("health_check")
        elapsed_ms = (time.perf_counter() - started) * 1000
    except (RedisError, OSError) as e:
        logger.error(f"Redis health check failed: {e}", exc_info=True)
        raise DependencyError(f"Redis health check failed: {e}") from e

    return {
        "status": "ok" if value == "ok" else "error",
        "responseTime": f"{elapsed_ms:.0f}ms",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
