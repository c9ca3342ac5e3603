# src/routes/dashboard.py
from fastapi import APIRouter, Depends
from typing import Any
from core.dependencies import get_current_user, get_store
from db.document_store import DocumentStore
from schemas.response_schemas import DashboardStats
from schemas.user_schemas import UserProfile
from services.dashboard_service import dashboard_service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "",
    response_model=DashboardStats,
    response_model_exclude_none=True,
    summary="Dashboard statistics",
    description="Each section is included only when the caller may read its collection",
)
async def get_dashboard(
    store: DocumentStore = Depends(get_store),
    current_user: UserProfile = Depends(get_current_user),
) -> Any:
    return await dashboard_service.get_dashboard_stats(store, current_user)
