# src/routes/activity_logs.py
from fastapi import APIRouter, Depends, Query
from typing import Any, Optional
from core.config import settings
from core.dependencies import ResourceGuard, get_store
from db.document_store import DocumentStore
from models.enums import ActivityType, Operation, Resource
from schemas.activity_schemas import ActivityLog
from schemas.base_schemas import CursorPage, PaginatedResponse
from services.activity_service import activity_service

router = APIRouter(prefix="/activity-logs", tags=["activity-logs"])

can_read = ResourceGuard(Resource.ACTIVITY_LOGS, Operation.READ)


def activity_filters(
    user_id: Optional[str] = Query(None, alias="userId"),
    type: Optional[ActivityType] = Query(None),
) -> dict:
    return {"userId": user_id, "type": type}


@router.get("", response_model=PaginatedResponse[ActivityLog], summary="List activity")
async def list_activity_logs(
    filters: dict = Depends(activity_filters),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    """Newest entries first"""
    return await activity_service.list(store, filters, page, limit)


@router.get("/cursor", response_model=CursorPage[ActivityLog], summary="Page through activity")
async def page_activity_logs(
    filters: dict = Depends(activity_filters),
    cursor: Optional[str] = None,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await activity_service.fetch_page(store, filters, cursor, limit)
