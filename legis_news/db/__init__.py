"""Database access layer for the legislative news service.

Main exports:
- DatabaseConfig: Pool configuration
- init_pool: Initialize connection pool (call on startup)
- get_pool: Get the connection pool
- close_pool: Close connection pool (call on shutdown)
- check_pool_health: Health check for monitoring
- ArticleStore lives in legis_news/db/news_db.py

Query helpers live in legis_news/db_helpers.py (fetch_one, fetch_all,
transaction); query construction in query_builders.
"""

from .pool import (
    DatabaseConfig,
    init_pool,
    get_pool,
    close_pool,
    check_pool_health,
)
from .query_builders import (
    SelectQuery,
    FilterClause,
    ARTICLE_FILTER_CLAUSES,
    apply_article_filters,
    build_article_predicate,
    build_update,
    validate_identifier,
)

__all__ = [
    # Connection pool
    "DatabaseConfig",
    "init_pool",
    "get_pool",
    "close_pool",
    "check_pool_health",
    # Query builders
    "SelectQuery",
    "FilterClause",
    "ARTICLE_FILTER_CLAUSES",
    "apply_article_filters",
    "build_article_predicate",
    "build_update",
    "validate_identifier",
]
