"""Admin service for reference-data inserts."""

import logging
from typing import Any, Dict, Optional

from legis_news.cache.base import CacheBackend
from legis_news.cache.keys import STATES_LIST_KEY, TOPICS_LIST_KEY
from legis_news.cache.read_through import invalidate_cache
from legis_news.db.news_db import ArticleStore
from legis_news.errors import ConflictError

logger = logging.getLogger(__name__)


class AdminService:
    """
    Inserts states and topics.

    A successful insert drops only the matching list key. A rejected insert
    (duplicate name or abbreviation) leaves the cache untouched.
    """

    def __init__(self, store: ArticleStore, cache: CacheBackend):
        self.store = store
        self.cache = cache

    async def create_state(self, name: str, abbreviation: str) -> Dict[str, Any]:
        """
        Insert a state.

        Raises:
            ConflictError: If the name or abbreviation already exists
            DependencyError: If the store or the cache fails
        """
        try:
            row = await self.store.insert_state(name, abbreviation.upper())
        except ConflictError as e:
            logger.warning(f"State insert rejected for {name!r}: {e.message}")
            raise ConflictError("State already exists") from e

        await invalidate_cache(self.cache, key=STATES_LIST_KEY)
        logger.info(f"Created state {name} ({abbreviation.upper()})")
        return row

    async def create_topic(self, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        """
        Insert a topic.

        Raises:
            ConflictError: If the name already exists
            DependencyError: If the store or the cache fails
        """
        try:
            row = await self.store.insert_topic(name, description)
        except ConflictError as e:
            logger.warning(f"Topic insert rejected for {name!r}: {e.message}")
            raise ConflictError("Topic already exists") from e

        await invalidate_cache(self.cache, key=TOPICS_LIST_KEY)
        logger.info(f"Created topic {name}")
        return row
