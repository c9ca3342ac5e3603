# src/routes/affiliate_tracking.py
from fastapi import APIRouter, Depends, Query, Request, status
from typing import Any, Optional
from core.config import settings
from core.dependencies import ResourceGuard, get_store
from db.document_store import DocumentStore
from models.enums import AccountType, Operation, PaymentStatus, Resource
from schemas.affiliate_schemas import (
    AffiliateTracking,
    AffiliateTrackingCreate,
    CommissionSummary,
)
from schemas.base_schemas import CursorPage, PaginatedResponse
from services.affiliate_service import affiliate_tracking_service
from utils.rate_limiter import limiter
from utils.logger import setup_logger

router = APIRouter(prefix="/affiliate-tracking", tags=["affiliate-tracking"])
logger = setup_logger("AFFILIATE_TRACKING_ROUTES")

can_read = ResourceGuard(Resource.AFFILIATE_TRACKING, Operation.READ)
can_write = ResourceGuard(Resource.AFFILIATE_TRACKING, Operation.WRITE)


def tracking_filters(
    affiliate_id: Optional[str] = Query(None, alias="affiliateId"),
    status: Optional[PaymentStatus] = Query(None),
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    user_type: Optional[AccountType] = Query(None, alias="userType"),
) -> dict:
    return {
        "affiliateId": affiliate_id,
        "status": status,
        "year": year,
        "month": month,
        "userType": user_type,
    }


@router.get(
    "", response_model=PaginatedResponse[AffiliateTracking], summary="List commission records"
)
async def list_tracking(
    filters: dict = Depends(tracking_filters),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await affiliate_tracking_service.list(store, filters, page, limit)


@router.get(
    "/cursor", response_model=CursorPage[AffiliateTracking], summary="Page through commissions"
)
async def page_tracking(
    filters: dict = Depends(tracking_filters),
    cursor: Optional[str] = None,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await affiliate_tracking_service.fetch_page(store, filters, cursor, limit)


@router.post(
    "",
    response_model=AffiliateTracking,
    status_code=status.HTTP_201_CREATED,
    summary="Record commission",
    description="Amount defaults to the commission on the account type's plan",
)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_tracking(
    request: Request,
    tracking_data: AffiliateTrackingCreate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    return await affiliate_tracking_service.create(store, tracking_data, current_user)


@router.get(
    "/{affiliate_id}/stats", response_model=CommissionSummary, summary="Commission summary"
)
async def commission_stats(
    affiliate_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    """Total, pending and paid commission with a per-month breakdown"""
    return await affiliate_tracking_service.commission_stats(store, affiliate_id)


@router.get("/{tracking_id}", response_model=AffiliateTracking, summary="Get commission record")
async def get_tracking(
    tracking_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await affiliate_tracking_service.get(store, tracking_id)


@router.patch(
    "/{tracking_id}/paid", response_model=AffiliateTracking, summary="Mark commission paid"
)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def mark_tracking_paid(
    request: Request,
    tracking_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    return await affiliate_tracking_service.mark_paid(store, tracking_id, current_user)
