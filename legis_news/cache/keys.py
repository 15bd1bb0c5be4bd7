"""Cache key builders for the legislative news cache.

Key Naming Convention:
    - Use colons (:) to separate namespaces
    - news:{json}     one page of a filtered article list
    - article:{id}    a single article
    - states:list     reference list of state names
    - topics:list     reference list of topic names

List keys embed every filter and pagination field, serialized with sorted
keys, so semantically identical queries map to the same key no matter how
their filters were built. Because a list key cannot be traced back to the
articles it holds, writes drop the whole "news:*" namespace.

Usage:
    from legis_news.cache.keys import news_list_key, article_key

    key = news_list_key(NewsFilters(state="Texas"), Pagination(page=1, limit=10))
    # 'news:{"end_date":null,"limit":10,"page":1,"search_query":null,"start_date":null,"state":"Texas","topic":null}'
"""

from legis_news.cache.serializer import serialize_json
from legis_news.models import NewsFilters, Pagination

# Cache key prefixes for different data categories
PREFIX_NEWS = "news"
PREFIX_ARTICLE = "article"

STATES_LIST_KEY = "states:list"
TOPICS_LIST_KEY = "topics:list"

_FILTER_FIELDS = ("state", "topic", "search_query", "start_date", "end_date")


def news_list_key(filters: NewsFilters, pagination: Pagination) -> str:
    """
    Build cache key for one page of a filtered article list.

    Args:
        filters: Article filters
        pagination: Page window

    Returns:
        Cache key in format: "news:{sorted json of filters + page + limit}"
    """
    payload = {name: getattr(filters, name) for name in _FILTER_FIELDS}
    payload["page"] = pagination.page
    payload["limit"] = pagination.limit
    return f"{PREFIX_NEWS}:{serialize_json(payload, sort_keys=True)}"


def article_key(article_id: int) -> str:
    """
    Build cache key for a single article.

    Example:
        >>> article_key(5)
        'article:5'
    """
    return f"{PREFIX_ARTICLE}:{int(article_id)}"


def news_keys_pattern() -> str:
    """
    Get pattern to match all article list cache keys.

    Returns:
        Pattern: "news:*"
    """
    return f"{PREFIX_NEWS}:*"
