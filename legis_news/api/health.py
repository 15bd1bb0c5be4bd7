"""Health check endpoints."""

import logging
from typing import Any, Dict

from fastapi import APIRouter

from legis_news.errors import AppError
from legis_news.services import health_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> Dict[str, Any]:
    return health_service.get_process_health()


@router.get("/db")
async def health_db() -> Dict[str, Any]:
    try:
        return await health_service.check_database()
    except AppError as e:
        logger.error(f"Database health check failed: {e.message}")
        raise AppError("Database health check failed", status_code=500) from e


@router.get("/redis")
async def health_redis() -> Dict[str, Any]:
    try:
        return await health_service.check_redis()
    except AppError as e:
        logger.error(f"Redis health check failed: {e.message}")
        raise AppError("Redis health check failed", status_code=500) from e
