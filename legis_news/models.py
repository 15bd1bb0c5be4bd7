"""Pydantic models for articles, filters, pagination and admin payloads."""

import math
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from legis_news.config import (
    ARTICLE_MUTABLE_FIELDS,
    CONTENT_MIN_LENGTH,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
)
from legis_news.errors import ValidationError


# ============================================================================
# Articles
# ============================================================================


class Article(BaseModel):
    """A legislative news article as stored in the articles table."""

    id: int
    title: str
    content: str
    description: Optional[str] = None
    state: Optional[str] = None
    topic: Optional[str] = None
    published_date: Optional[datetime] = None
    source_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class NewsFilters(BaseModel):
    """Optional predicates narrowing which articles are listed.

    A field left as None means "no constraint", never "match empty".
    """

    state: Optional[str] = None
    topic: Optional[str] = None
    search_query: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # published_date is TIMESTAMP WITHOUT TIME ZONE; compare in UTC
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class Pagination(BaseModel):
    """Page window. page >= 1, 1 <= limit <= 100."""

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def parse(cls, page: Optional[int] = None, limit: Optional[int] = None) -> "Pagination":
        """
        Build a Pagination from raw caller input.

        Args:
            page: Requested page (None = default 1)
            limit: Requested page size (None = default 10)

        Returns:
            Validated Pagination

        Raises:
            ValidationError: If page < 1 or limit is outside 1-100
        """
        values = {}
        if page is not None:
            values["page"] = page
        if limit is not None:
            values["limit"] = limit
        try:
            return cls(**values)
        except PydanticValidationError:
            raise ValidationError("Invalid pagination parameters")


class NewsResponse(BaseModel):
    """One page of articles plus the window count of all matches."""

    model_config = ConfigDict(populate_by_name=True)

    articles: List[Article]
    total: int
    page: int
    total_pages: int = Field(alias="totalPages")
    has_more: bool = Field(alias="hasMore")

    @classmethod
    def from_page(cls, articles: List[Article], total: int, pagination: Pagination) -> "NewsResponse":
        total_pages = math.ceil(total / pagination.limit)
        return cls(
            articles=articles,
            total=total,
            page=pagination.page,
            total_pages=total_pages,
            has_more=pagination.page < total_pages,
        )


class ArticleUpdate(BaseModel):
    """Partial article update. Unknown fields are dropped on parse."""

    title: Optional[str] = Field(default=None, min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    content: Optional[str] = Field(default=None, min_length=CONTENT_MIN_LENGTH)
    description: Optional[str] = None
    state: Optional[str] = None
    topic: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self) -> Dict[str, Any]:
        """Fields the caller actually sent, restricted to mutable columns."""
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if k in ARTICLE_MUTABLE_FIELDS}


# ============================================================================
# Reference Data
# ============================================================================


class StateCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    abbreviation: str = Field(min_length=2, max_length=2)


class TopicCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    description: Optional[str] = None
