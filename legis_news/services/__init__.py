"""Service layer for the legislative news API."""

from .news_service import NewsService
from .admin_service import AdminService

__all__ = ["NewsService", "AdminService"]
