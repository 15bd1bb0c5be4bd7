"""FastAPI dependency injection utilities.

Route handlers receive their services through these providers. Tests swap
them with app.dependency_overrides, typically pointing get_store at a fake
store and get_cache at a MemoryCache.
"""

import logging

from fastapi import Depends

from legis_news.cache.base import CacheBackend
from legis_news.db.news_db import ArticleStore
from legis_news.redis_client import AsyncRedisClient, get_redis_pool
from legis_news.services.admin_service import AdminService
from legis_news.services.news_service import NewsService

logger = logging.getLogger(__name__)


def get_cache() -> CacheBackend:
    """
    FastAPI dependency for the shared Redis-backed cache.

    Raises:
        RuntimeError: If the Redis pool was not initialized at startup
    """
    return AsyncRedisClient(get_redis_pool())


def get_store() -> ArticleStore:
    """FastAPI dependency for the PostgreSQL article store."""
    return ArticleStore()


def get_news_service(
    store: ArticleStore = Depends(get_store),
    cache: CacheBackend = Depends(get_cache),
) -> NewsService:
    """
    FastAPI dependency for NewsService.

    Example:
        @router.get("/api/news")
        async def list_news(service: NewsService = Depends(get_news_service)):
            ...
    """
    return NewsService(store, cache)


def get_admin_service(
    store: ArticleStore = Depends(get_store),
    cache: CacheBackend = Depends(get_cache),
) -> AdminService:
    """FastAPI dependency for AdminService."""
    return AdminService(store, cache)
