"""Cache layer for the legislative news service.

This package provides the cache capability the services depend on, the key
builders, JSON serialization, and the read-through / invalidation helpers.

Key Modules:
    - base: CacheBackend interface (get/set/delete/delete_pattern/ping)
    - memory: MemoryCache, an in-process CacheBackend
    - keys: Cache key builders (news:*, article:<id>, states:list, topics:list)
    - serializer: JSON serialization utilities
    - read_through: get_or_compute and invalidate_cache

The Redis implementation lives in legis_news.redis_client.

Example:
    from legis_news.cache import get_or_compute, article_key

    article = await get_or_compute(cache, article_key(5), load_article)
"""

from .base import CacheBackend
from .memory import MemoryCache
from .keys import (
    STATES_LIST_KEY,
    TOPICS_LIST_KEY,
    article_key,
    news_keys_pattern,
    news_list_key,
)
from .read_through import get_or_compute, invalidate_cache

__all__ = [
    "CacheBackend",
    "MemoryCache",
    "STATES_LIST_KEY",
    "TOPICS_LIST_KEY",
    "article_key",
    "news_keys_pattern",
    "news_list_key",
    "get_or_compute",
    "invalidate_cache",
]
