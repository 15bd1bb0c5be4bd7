"""Admin API endpoints for reference data."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from legis_news.dependencies import get_admin_service
from legis_news.models import StateCreate, TopicCreate
from legis_news.services.admin_service import AdminService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/states", status_code=status.HTTP_201_CREATED)
async def create_state(
    body: StateCreate,
    service: AdminService = Depends(get_admin_service),
) -> Dict[str, Any]:
    """
    Create a state.

    Raises:
        ConflictError: 409 if the name or abbreviation already exists
    """
    return await service.create_state(body.name, body.abbreviation)


@router.post("/topics", status_code=status.HTTP_201_CREATED)
async def create_topic(
    body: TopicCreate,
    service: AdminService = Depends(get_admin_service),
) -> Dict[str, Any]:
    """
    Create a topic.

    Raises:
        ConflictError: 409 if the name already exists
    """
    return await service.create_topic(body.name, body.description)
