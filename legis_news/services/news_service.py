"""News service for article retrieval and updates."""

import logging
from typing import Any, Dict, List, Optional

from legis_news.cache.base import CacheBackend
from legis_news.cache.keys import (
    STATES_LIST_KEY,
    TOPICS_LIST_KEY,
    article_key,
    news_keys_pattern,
    news_list_key,
)
from legis_news.cache.read_through import get_or_compute, invalidate_cache
from legis_news.config import ARTICLE_MUTABLE_FIELDS, CACHE_TTL_SECONDS
from legis_news.db.news_db import ArticleStore
from legis_news.errors import ValidationError
from legis_news.models import Article, NewsFilters, NewsResponse, Pagination

logger = logging.getLogger(__name__)


class NewsService:
    """
    Service class for news operations.

    Provides business logic for:
    - Filtered, paginated article listing
    - Single article retrieval
    - Article updates with cache invalidation
    - State and topic reference lists

    Every read goes through get_or_compute, so a repeated call inside the TTL
    is answered from the cache without touching the store. Cached values are
    the JSON form of the result; both paths rebuild the same models from it.
    """

    def __init__(self, store: ArticleStore, cache: CacheBackend, ttl: int = CACHE_TTL_SECONDS):
        self.store = store
        self.cache = cache
        self.ttl = ttl

    async def list_articles(self, filters: NewsFilters, pagination: Pagination) -> NewsResponse:
        """
        Get one page of articles matching the filters.

        Args:
            filters: Article filters (None fields are unconstrained)
            pagination: Validated page window

        Returns:
            NewsResponse with articles ordered by published_date descending

        Raises:
            DependencyError: If the cache or the store fails
        """

        async def compute() -> Dict[str, Any]:
            rows, total = await self.store.fetch_page(filters, pagination.limit, pagination.offset)
            articles = [Article.model_validate(row) for row in rows]
            response = NewsResponse.from_page(articles, total, pagination)
            return response.model_dump(mode="json")

        data = await get_or_compute(self.cache, news_list_key(filters, pagination), compute, ttl=self.ttl)
        return NewsResponse.model_validate(data)

    async def get_article_by_id(self, article_id: int) -> Optional[Article]:
        """
        Get a single article.

        Returns:
            The article, or None if no article has that id (absence is not cached)
        """

        async def compute() -> Optional[Dict[str, Any]]:
            row = await self.store.fetch_by_id(article_id)
            if row is None:
                return None
            return Article.model_validate(row).model_dump(mode="json")

        data = await get_or_compute(self.cache, article_key(article_id), compute, ttl=self.ttl)
        if data is None:
            return None
        return Article.model_validate(data)

    async def update_article(self, article_id: int, updates: Dict[str, Any]) -> Optional[Article]:
        """
        Update an article and drop every cache entry that could hold it.

        Args:
            article_id: Article primary key
            updates: Requested changes; keys outside the mutable columns are ignored

        Returns:
            The updated article, or None if it does not exist

        Raises:
            ValidationError: If no valid field remains
            DependencyError: If the store or the cache fails
        """
        fields = {k: v for k, v in updates.items() if k in ARTICLE_MUTABLE_FIELDS}
        if not fields:
            raise ValidationError("No valid fields provided for update")

        row = await self.store.update_article(article_id, fields)
        if row is None:
            return None

        await invalidate_cache(self.cache, key=article_key(article_id))
        await invalidate_cache(self.cache, pattern=news_keys_pattern())
        logger.info(f"Updated article {article_id}: {sorted(fields)}")

        return Article.model_validate(row)

    async def get_states(self) -> List[str]:
        """State names from the reference table, sorted by name."""
        return await get_or_compute(self.cache, STATES_LIST_KEY, self.store.list_state_names, ttl=self.ttl)

    async def get_topics(self) -> List[str]:
        """Topic names from the reference table, sorted by name."""
        return await get_or_compute(self.cache, TOPICS_LIST_KEY, self.store.list_topic_names, ttl=self.ttl)
