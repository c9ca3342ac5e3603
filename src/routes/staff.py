# src/routes/staff.py
from fastapi import APIRouter, Depends, Query, Request, status
from typing import Any, Optional
from core.config import settings
from core.dependencies import ResourceGuard, get_store
from db.document_store import DocumentStore
from models.enums import Operation, Resource, UserRole
from schemas.base_schemas import CursorPage, PaginatedResponse
from schemas.user_schemas import StaffCreate, StaffUpdate, UserProfile
from services.staff_service import staff_service
from utils.rate_limiter import limiter
from utils.logger import setup_logger

router = APIRouter(prefix="/staff", tags=["staff"])
logger = setup_logger("STAFF_ROUTES")

can_read = ResourceGuard(Resource.USERS, Operation.READ)
can_write = ResourceGuard(Resource.USERS, Operation.WRITE)


def staff_filters(
    doctor_id: Optional[str] = Query(None, alias="doctorId"),
    hospital_id: Optional[str] = Query(None, alias="hospitalId"),
    role: Optional[UserRole] = Query(None),
    affiliate_id: Optional[str] = Query(None, alias="affiliateId"),
) -> dict:
    return {
        "doctorId": doctor_id,
        "hospitalId": hospital_id,
        "role": role,
        "affiliateId": affiliate_id,
    }


@router.get("", response_model=PaginatedResponse[UserProfile], summary="List staff")
async def list_staff(
    filters: dict = Depends(staff_filters),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await staff_service.list(store, filters, page, limit)


@router.get("/cursor", response_model=CursorPage[UserProfile], summary="Page through staff")
async def page_staff(
    filters: dict = Depends(staff_filters),
    cursor: Optional[str] = None,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await staff_service.fetch_page(store, filters, cursor, limit)


@router.post(
    "",
    response_model=UserProfile,
    status_code=status.HTTP_201_CREATED,
    summary="Create staff profile",
    description="Profile for an account already provisioned at the identity provider",
)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_staff(
    request: Request,
    staff_data: StaffCreate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    logger.info(f"Creating {staff_data.role} profile for uid {staff_data.uid}")
    return await staff_service.create(store, staff_data, current_user)


@router.get("/{user_id}", response_model=UserProfile, summary="Get staff member")
async def get_staff(
    user_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await staff_service.get(store, user_id)


@router.patch("/{user_id}", response_model=UserProfile, summary="Update staff member")
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_staff(
    request: Request,
    user_id: str,
    staff_data: StaffUpdate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    """Change role, permissions or toggle isActive"""
    return await staff_service.update(store, user_id, staff_data, current_user)
