# src/routes/diet_plans.py
from fastapi import APIRouter, Depends, Query, Request, status
from typing import Any, Optional
from core.config import settings
from core.dependencies import ResourceGuard, get_store
from db.document_store import DocumentStore
from models.enums import Operation, Resource
from schemas.base_schemas import CursorPage, PaginatedResponse
from schemas.diet_plan_schemas import DietPlan, DietPlanCreate, DietPlanUpdate
from services.diet_plan_service import diet_plan_service
from utils.rate_limiter import limiter

router = APIRouter(prefix="/diet-plans", tags=["diet-plans"])

can_read = ResourceGuard(Resource.DIET_PLANS, Operation.READ)
can_write = ResourceGuard(Resource.DIET_PLANS, Operation.WRITE)


@router.get("", response_model=PaginatedResponse[DietPlan], summary="List diet plans")
async def list_diet_plans(
    patient_id: Optional[str] = Query(None, alias="patientId"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await diet_plan_service.list(store, {"patientId": patient_id}, page, limit)


@router.get("/cursor", response_model=CursorPage[DietPlan], summary="Page through diet plans")
async def page_diet_plans(
    patient_id: Optional[str] = Query(None, alias="patientId"),
    cursor: Optional[str] = None,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await diet_plan_service.fetch_page(store, {"patientId": patient_id}, cursor, limit)


@router.post(
    "",
    response_model=DietPlan,
    status_code=status.HTTP_201_CREATED,
    summary="Create diet plan",
)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_diet_plan(
    request: Request,
    plan_data: DietPlanCreate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    return await diet_plan_service.create(store, plan_data, current_user)


@router.get("/{plan_id}", response_model=DietPlan, summary="Get diet plan")
async def get_diet_plan(
    plan_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await diet_plan_service.get(store, plan_id)


@router.patch("/{plan_id}", response_model=DietPlan, summary="Update diet plan")
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_diet_plan(
    request: Request,
    plan_id: str,
    plan_data: DietPlanUpdate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    return await diet_plan_service.update(store, plan_id, plan_data, current_user)
