"""Typed query builders for the articles store.

This module turns filter values into parameterized SQL for asyncpg. Builders
return SQL strings and parameter tuples that can be passed straight to the
async db_helpers functions. Nothing here executes a query.

Architecture:
    - Fluent, immutable SelectQuery (each method returns a new instance)
    - Automatic parameter placeholder management ($1, $2, ...)
    - Article filters are a fixed sequence of typed FilterClause entries,
      applied in declaration order, each contributing one bound value
    - Identifiers are validated before they are interpolated

Usage Examples:
    # Predicate only (combinable with any base query via AND)
    predicate, params = build_article_predicate(
        NewsFilters(state="Texas", search_query="water rights")
    )

    # Full page query with window count
    query, params = (apply_article_filters(SelectQuery("articles"), filters)
        .columns("*", "COUNT(*) OVER() AS total_count")
        .order_by("published_date DESC")
        .limit(10)
        .offset(20)
        .build())
    rows = await fetch_all(query, *params)

    # Partial UPDATE ... RETURNING
    query, params = build_update(
        table="articles",
        fields={"title": "New Title"},
        key_column="id",
        key_value=5,
        touch_column="updated_at",
    )

Notes:
    - All builders use $1, $2, $3 placeholders (asyncpg format)
    - The order of params always matches placeholder numbering
"""

import re
import logging
from typing import Any, Dict, Optional, Tuple
from dataclasses import dataclass

from legis_news.models import NewsFilters

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\$(\d+)")
_IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


# ============================================================================
# SELECT QUERY BUILDER
# ============================================================================

@dataclass(frozen=True)
class SelectQuery:
    """
    Fluent builder for SELECT queries.

    Example:
        query, params = (SelectQuery("articles")
            .where("state = $1", "Texas")
            .where("topic = $1", "Energy")
            .order_by("published_date DESC")
            .limit(10)
            .build())
        # SELECT * FROM articles WHERE (state = $1) AND (topic = $2)
        #   ORDER BY published_date DESC LIMIT $3

    Notes:
        - Each where() condition numbers its own placeholders from $1;
          they are shifted past the parameters already collected
        - LIMIT and OFFSET are bound as the trailing parameters
    """

    table: str
    _columns: Tuple[str, ...] = ()
    _where_clauses: Tuple[str, ...] = ()
    _params: Tuple[Any, ...] = ()
    _order_by_clause: Optional[str] = None
    _limit_value: Optional[int] = None
    _offset_value: Optional[int] = None

    def __post_init__(self):
        if not validate_identifier(self.table):
            raise ValueError(f"Invalid table name: {self.table!r}")

    def _replace(self, **changes) -> "SelectQuery":
        values = {
            "table": self.table,
            "_columns": self._columns,
            "_where_clauses": self._where_clauses,
            "_params": self._params,
            "_order_by_clause": self._order_by_clause,
            "_limit_value": self._limit_value,
            "_offset_value": self._offset_value,
        }
        values.update(changes)
        return SelectQuery(**values)

    def columns(self, *cols: str) -> "SelectQuery":
        """Specify select-list expressions (defaults to "*")."""
        return self._replace(_columns=cols)

    def where(self, condition: str, *params: Any) -> "SelectQuery":
        """
        Add a WHERE condition, combined with the others by AND.

        Args:
            condition: Condition with placeholders numbered from $1
            *params: Values for those placeholders, in order

        Returns:
            New SelectQuery instance with the condition added

        Example:
            .where("published_date >= $1", start)
            .where("title @@ $1 OR content @@ $1", text)  # one value used twice
        """
        renumbered = _renumber_placeholders(condition, len(self._params))
        return self._replace(
            _where_clauses=self._where_clauses + (renumbered,),
            _params=self._params + params,
        )

    def order_by(self, order: str) -> "SelectQuery":
        """Set ORDER BY (e.g. "published_date DESC")."""
        return self._replace(_order_by_clause=order)

    def limit(self, n: int) -> "SelectQuery":
        return self._replace(_limit_value=n)

    def offset(self, n: int) -> "SelectQuery":
        return self._replace(_offset_value=n)

    def where_clause(self) -> Tuple[str, Tuple[Any, ...]]:
        """
        Build only the predicate.

        Returns:
            Tuple of (predicate, params). The predicate is "TRUE" when no
            condition has been added, so it matches every row.
        """
        if not self._where_clauses:
            return "TRUE", ()
        return " AND ".join(f"({clause})" for clause in self._where_clauses), self._params

    def build(self) -> Tuple[str, Tuple[Any, ...]]:
        """
        Build the final SQL query and parameters.

        Returns:
            Tuple of (query_string, parameters_tuple)
        """
        columns = ", ".join(self._columns) if self._columns else "*"
        query_parts = [f"SELECT {columns} FROM {self.table}"]
        params = list(self._params)

        if self._where_clauses:
            predicate, _ = self.where_clause()
            query_parts.append(f"WHERE {predicate}")

        if self._order_by_clause:
            query_parts.append(f"ORDER BY {self._order_by_clause}")

        if self._limit_value is not None:
            params.append(self._limit_value)
            query_parts.append(f"LIMIT ${len(params)}")

        if self._offset_value is not None:
            params.append(self._offset_value)
            query_parts.append(f"OFFSET ${len(params)}")

        return " ".join(query_parts), tuple(params)


def _renumber_placeholders(condition: str, offset: int) -> str:
    """Replace $N with $(N + offset)."""

    def replace_placeholder(match):
        return f"${int(match.group(1)) + offset}"

    return _PLACEHOLDER.sub(replace_placeholder, condition)


# ============================================================================
# ARTICLE FILTERS
# ============================================================================

@dataclass(frozen=True)
class FilterClause:
    """One optional article predicate: applied only if the filter field is set."""

    field: str
    condition: str


SEARCH_CONDITION = (
    "to_tsvector('english', title) @@ plainto_tsquery('english', $1) "
    "OR to_tsvector('english', content) @@ plainto_tsquery('english', $1)"
)

# Application order is fixed; placeholder numbering depends on it
ARTICLE_FILTER_CLAUSES: Tuple[FilterClause, ...] = (
    FilterClause("state", "state = $1"),
    FilterClause("topic", "topic = $1"),
    FilterClause("start_date", "published_date >= $1"),
    FilterClause("end_date", "published_date <= $1"),
    FilterClause("search_query", SEARCH_CONDITION),
)


def apply_article_filters(query: SelectQuery, filters: NewsFilters) -> SelectQuery:
    """Add a WHERE condition for every filter field that is set."""
    for clause in ARTICLE_FILTER_CLAUSES:
        value = getattr(filters, clause.field)
        if value is None or value == "":
            continue
        query = query.where(clause.condition, value)
    return query


def build_article_predicate(filters: NewsFilters) -> Tuple[str, Tuple[Any, ...]]:
    """
    Translate filters into a predicate fragment and its bound values.

    Args:
        filters: Article filters (all fields optional)

    Returns:
        Tuple of (predicate, params); ("TRUE", ()) when no filter is set

    Example:
        >>> build_article_predicate(NewsFilters(state="Texas", topic="Energy"))
        ('(state = $1) AND (topic = $2)', ('Texas', 'Energy'))
    """
    return apply_article_filters(SelectQuery("articles"), filters).where_clause()


# ============================================================================
# UPDATE HELPER
# ============================================================================

def build_update(
    table: str,
    fields: Dict[str, Any],
    key_column: str,
    key_value: Any,
    touch_column: Optional[str] = None,
) -> Tuple[str, Tuple[Any, ...]]:
    """
    Build an UPDATE ... RETURNING * query for a single row.

    Args:
        table: Table name
        fields: Column name -> new value (must be non-empty)
        key_column: Column identifying the row (e.g. "id")
        key_value: Value of key_column
        touch_column: Optional timestamp column set to CURRENT_TIMESTAMP

    Returns:
        Tuple of (query_string, parameters_tuple)

    Raises:
        ValueError: If fields is empty or any identifier is unsafe

    Example:
        >>> build_update("articles", {"title": "New"}, "id", 5, "updated_at")
        ('UPDATE articles SET title = $1, updated_at = CURRENT_TIMESTAMP WHERE id = $2 RETURNING *', ('New', 5))
    """
    if not fields:
        raise ValueError("Fields dictionary cannot be empty")

    for identifier in (table, key_column, touch_column, *fields.keys()):
        if identifier is not None and not validate_identifier(identifier):
            raise ValueError(f"Invalid identifier: {identifier!r}")

    assignments = [f"{column} = ${i + 1}" for i, column in enumerate(fields)]
    if touch_column:
        assignments.append(f"{touch_column} = CURRENT_TIMESTAMP")

    params = tuple(fields.values()) + (key_value,)
    query = (
        f"UPDATE {table} SET {', '.join(assignments)} "
        f"WHERE {key_column} = ${len(params)} RETURNING *"
    )
    return query, params


# ============================================================================
# VALIDATION HELPERS
# ============================================================================

def validate_identifier(identifier: str) -> bool:
    """
    Validate that a string is a safe SQL identifier.

    Notes:
        - Allows alphanumeric characters and underscores
        - Must start with a letter or underscore
        - Maximum length 63 characters (PostgreSQL limit)
    """
    if not identifier or len(identifier) > 63:
        return False
    return bool(_IDENTIFIER.match(identifier))
