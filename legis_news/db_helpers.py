"""Async database helper utilities using asyncpg connection pool.

This module provides high-level async utilities for the queries the store
runs, abstracting away connection pool management and translating driver
failures into domain errors.

Architecture:
    - All functions are async and use the global connection pool
    - Connection acquisition/release is automatic via context managers
    - Results are returned as dicts
    - Transactions are supported via async context manager
    - Unique violations become ConflictError; any other driver, network or
      timeout failure becomes DependencyError

Usage Examples:
    # Fetch single row
    article = await fetch_one("SELECT * FROM articles WHERE id = $1", article_id)

    # Fetch all rows
    rows = await fetch_all("SELECT name FROM states ORDER BY name")

    # Transactions
    async with transaction() as conn:
        row = await conn.fetchrow(update_query, *params)

Notes:
    - Uses $1, $2, $3 parameter placeholders (asyncpg format)
    - Query timeout is configured at pool level
"""

import logging
from typing import Any, AsyncIterator, Dict, List, Optional
from contextlib import asynccontextmanager

import asyncpg

from legis_news.db.pool import DB_ERRORS, get_pool
from legis_news.errors import ConflictError, DependencyError

logger = logging.getLogger(__name__)


def _log_failure(operation: str, error: Exception, query: str, args: tuple) -> None:
    logger.error(f"Error in {operation}: {error}", exc_info=True)
    logger.error(f"Query: {query}")
    logger.error(f"Args: {args}")


# ============================================================================
# FETCH OPERATIONS (SELECT)
# ============================================================================

async def fetch_one(query: str, *args) -> Optional[Dict[str, Any]]:
    """
    Fetch a single row from the database.

    Args:
        query: SQL query with $1, $2, ... placeholders
        *args: Query parameters

    Returns:
        Dict with column names as keys, or None if no row found

    Raises:
        DependencyError: If the database fails
    """
    pool = get_pool()

    try:
        async with pool.acquire() as conn:
            row = await conn.fetchrow(query, *args)
            return dict(row) if row else None

    except DB_ERRORS as e:
        _log_failure("fetch_one", e, query, args)
        raise DependencyError(f"Database query failed: {e}") from e


async def fetch_all(query: str, *args) -> List[Dict[str, Any]]:
    """
    Fetch all rows from the database.

    Args:
        query: SQL query with $1, $2, ... placeholders
        *args: Query parameters

    Returns:
        List of dicts with column names as keys (empty list if no rows)

    Raises:
        DependencyError: If the database fails
    """
    pool = get_pool()

    try:
        async with pool.acquire() as conn:
            rows = await conn.fetch(query, *args)
            return [dict(row) for row in rows]

    except DB_ERRORS as e:
        _log_failure("fetch_all", e, query, args)
        raise DependencyError(f"Database query failed: {e}") from e


# ============================================================================
# TRANSACTION MANAGEMENT
# ============================================================================

@asynccontextmanager
async def transaction() -> AsyncIterator[asyncpg.Connection]:
    """
    Async context manager for database transactions.

    Yields:
        asyncpg.Connection: Database connection with active transaction

    Raises:
        ConflictError: If a unique constraint rejected a write
        DependencyError: If the database fails
        Exception: Anything else raised inside the block, unchanged

    Example:
        async with transaction() as conn:
            row = await conn.fetchrow(
                "UPDATE articles SET title = $1 WHERE id = $2 RETURNING *",
                "New Title", 5
            )
            # Commits automatically on success

    Notes:
        - BEGIN on entry, COMMIT on clean exit
        - ROLLBACK on any exception, before the error propagates
        - Connection is automatically returned to pool after transaction
    """
    pool = get_pool()

    try:
        async with pool.acquire() as conn:
            async with conn.transaction():
                yield conn

    except asyncpg.UniqueViolationError as e:
        logger.warning(f"Transaction rolled back on unique violation: {e}")
        raise ConflictError(e.detail or str(e)) from e

    except DB_ERRORS as e:
        logger.error(f"Transaction failed: {e}", exc_info=True)
        raise DependencyError(f"Database transaction failed: {e}") from e
