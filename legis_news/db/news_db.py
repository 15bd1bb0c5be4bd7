"""PostgreSQL store for articles and reference data.

ArticleStore is the only component that talks to the database. It assembles
queries with the builders in query_builders and runs them through db_helpers,
so every method returns plain dicts and raises only domain errors.

Database Tables:
    - articles: id, title, content, description, state, topic,
      published_date, source_url, created_at, updated_at
    - states: id, name (unique), abbreviation (unique), created_at
    - topics: id, name (unique), description, created_at
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from legis_news.config import ARTICLE_MUTABLE_FIELDS
from legis_news.db.query_builders import SelectQuery, apply_article_filters, build_update
from legis_news.db_helpers import fetch_all, fetch_one, transaction
from legis_news.models import NewsFilters

logger = logging.getLogger(__name__)

ARTICLES_TABLE = "articles"
TOTAL_COUNT_COLUMN = "total_count"


class ArticleStore:
    """Store operations used by the news and admin services."""

    async def fetch_page(
        self, filters: NewsFilters, limit: int, offset: int
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Fetch one page of matching articles and the total match count.

        The count comes from a COUNT(*) OVER() window in the same query, so a
        page past the end (no rows) reports a total of 0.

        Returns:
            Tuple of (rows ordered by published_date DESC, total)
        """
        query, params = (
            apply_article_filters(SelectQuery(ARTICLES_TABLE), filters)
            .columns("*", f"COUNT(*) OVER() AS {TOTAL_COUNT_COLUMN}")
            .order_by("published_date DESC")
            .limit(limit)
            .offset(offset)
            .build()
        )
        rows = await fetch_all(query, *params)

        total = int(rows[0][TOTAL_COUNT_COLUMN]) if rows else 0
        for row in rows:
            row.pop(TOTAL_COUNT_COLUMN, None)
        return rows, total

    async def fetch_by_id(self, article_id: int) -> Optional[Dict[str, Any]]:
        return await fetch_one(f"SELECT * FROM {ARTICLES_TABLE} WHERE id = $1", article_id)

    async def update_article(self, article_id: int, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update the allowed columns of one article inside a transaction.

        Args:
            article_id: Article primary key
            fields: Column -> value; columns outside ARTICLE_MUTABLE_FIELDS are dropped

        Returns:
            The updated row, or None when no article has that id

        Raises:
            ValueError: If no updatable column remains
        """
        allowed = {k: v for k, v in fields.items() if k in ARTICLE_MUTABLE_FIELDS}
        query, params = build_update(
            table=ARTICLES_TABLE,
            fields=allowed,
            key_column="id",
            key_value=article_id,
            touch_column="updated_at",
        )

        async with transaction() as conn:
            row = await conn.fetchrow(query, *params)

        if row is None:
            logger.info(f"Update matched no article with id {article_id}")
            return None
        return dict(row)

    async def list_state_names(self) -> List[str]:
        rows = await fetch_all("SELECT name FROM states ORDER BY name")
        return [row["name"] for row in rows]

    async def list_topic_names(self) -> List[str]:
        rows = await fetch_all("SELECT name FROM topics ORDER BY name")
        return [row["name"] for row in rows]

    async def insert_state(self, name: str, abbreviation: str) -> Dict[str, Any]:
        """Insert a state. Raises ConflictError if the name or abbreviation exists."""
        async with transaction() as conn:
            row = await conn.fetchrow(
                "INSERT INTO states (name, abbreviation) VALUES ($1, $2) RETURNING *",
                name,
                abbreviation,
            )
        return dict(row)

    async def insert_topic(self, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        """Insert a topic. Raises ConflictError if the name exists."""
        async with transaction() as conn:
            row = await conn.fetchrow(
                "INSERT INTO topics (name, description) VALUES ($1, $2) RETURNING *",
                name,
                description,
            )
        return dict(row)
