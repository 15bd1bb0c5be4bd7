"""News API endpoints."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from legis_news.dependencies import get_news_service
from legis_news.errors import NotFoundError
from legis_news.models import Article, ArticleUpdate, NewsFilters, NewsResponse, Pagination
from legis_news.services.news_service import NewsService

logger = logging.getLogger(__name__)

# Create router for news endpoints
router = APIRouter(prefix="/api/news", tags=["news"])


@router.get("", response_model=NewsResponse, response_model_by_alias=True)
async def list_news(
    state: Optional[str] = Query(default=None),
    topic: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    page: Optional[int] = Query(default=None),
    limit: Optional[int] = Query(default=None),
    service: NewsService = Depends(get_news_service),
) -> NewsResponse:
    """
    List articles, newest first.

    Query params:
        state, topic: exact match
        search: full-text match on title or content
        startDate, endDate: inclusive published_date bounds
        page (>= 1, default 1), limit (1-100, default 10)

    Raises:
        ValidationError: 400 if page or limit is out of range
    """
    pagination = Pagination.parse(page=page, limit=limit)
    filters = NewsFilters(
        state=state or None,
        topic=topic or None,
        search_query=search or None,
        start_date=start_date,
        end_date=end_date,
    )
    return await service.list_articles(filters, pagination)


# Metadata routes are registered before /{article_id} so "metadata" is never
# parsed as an id.
@router.get("/metadata/states")
async def list_states(service: NewsService = Depends(get_news_service)) -> List[str]:
    return await service.get_states()


@router.get("/metadata/topics")
async def list_topics(service: NewsService = Depends(get_news_service)) -> List[str]:
    return await service.get_topics()


@router.get("/{article_id}", response_model=Article)
async def get_article(article_id: int, service: NewsService = Depends(get_news_service)) -> Article:
    """
    Get a single article.

    Raises:
        NotFoundError: 404 if no article has that id
    """
    article = await service.get_article_by_id(article_id)
    if article is None:
        raise NotFoundError("Article not found")
    return article


@router.put("/{article_id}", response_model=Article)
async def update_article(
    article_id: int,
    body: ArticleUpdate,
    service: NewsService = Depends(get_news_service),
) -> Article:
    """
    Update title, content, description, state or topic of an article.

    Raises:
        ValidationError: 400 if no valid field is provided or a field is malformed
        NotFoundError: 404 if no article has that id
    """
    changes: Dict[str, Any] = body.changes()
    article = await service.update_article(article_id, changes)
    if article is None:
        raise NotFoundError("Article not found")
    return article
