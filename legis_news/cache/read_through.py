"""Read-through caching and invalidation helpers.

get_or_compute() implements the get-or-compute-and-store pattern on top of an
injected CacheBackend:

    1. GET the key; on a hit, deserialize and return without computing
    2. On a miss, await compute_fn(), serialize the result, SET it with the TTL
    3. Return the computed value

Failure policy:
    - Cache errors (DependencyError) propagate to the caller. A Redis outage
      is never reported as a hit and never silently bypassed.
    - A cached payload that fails to decode is logged and recomputed.
    - None results are returned but never stored.

Usage:
    from legis_news.cache.read_through import get_or_compute, invalidate_cache

    data = await get_or_compute(cache, article_key(5), load_article, ttl=300)

    await invalidate_cache(cache, key=article_key(5))
    await invalidate_cache(cache, pattern=news_keys_pattern())
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from legis_news.cache.base import CacheBackend
from legis_news.cache.serializer import serialize_json, deserialize_json
from legis_news.config import CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)


async def get_or_compute(
    cache: CacheBackend,
    key: str,
    compute_fn: Callable[[], Awaitable[Any]],
    ttl: int = CACHE_TTL_SECONDS,
) -> Any:
    """
    Return the cached value for key, computing and storing it on a miss.

    Args:
        cache: Cache backend
        key: Cache key
        compute_fn: Zero-argument coroutine function producing a JSON-compatible value
        ttl: Time-to-live in seconds for a newly stored value

    Returns:
        The cached or freshly computed value

    Raises:
        DependencyError: If the cache cannot be read or written
        Exception: Whatever compute_fn raises (nothing is cached)
    """
    cached_value = await cache.get(key)

    if cached_value is not None:
        try:
            result = deserialize_json(cached_value)
            logger.info(f"Cache HIT: {key}")
            return result
        except ValueError as e:
            logger.error(f"Failed to deserialize cached value for {key}: {e}. Recomputing.")

    logger.info(f"Cache MISS: {key}")
    result = await compute_fn()

    if result is None:
        logger.debug(f"Not caching empty result for {key}")
        return None

    await cache.set(key, serialize_json(result), ttl=ttl)
    logger.info(f"Cache SET: {key} (ttl={ttl})")
    return result


async def invalidate_cache(
    cache: CacheBackend,
    key: Optional[str] = None,
    pattern: Optional[str] = None,
) -> int:
    """
    Delete one key or every key matching a pattern.

    Args:
        cache: Cache backend
        key: Specific cache key to delete
        pattern: Glob pattern to match (e.g. "news:*")

    Returns:
        Number of keys deleted (0 when nothing matched)

    Raises:
        ValueError: If neither key nor pattern is provided
        DependencyError: If the cache cannot be reached
    """
    if key is None and pattern is None:
        raise ValueError("Either 'key' or 'pattern' must be provided")

    if key is not None:
        count = await cache.delete(key)
        logger.info(f"Cache invalidated: {key} (deleted={count})")
        return count

    count = await cache.delete_pattern(pattern)
    logger.info(f"Cache invalidated by pattern: {pattern} (deleted={count})")
    return count
