# src/routes/billings.py
from fastapi import APIRouter, Depends, Query, Request, status
from typing import Any, Optional
from core.config import settings
from core.dependencies import ResourceGuard, get_store
from db.document_store import DocumentStore
from models.enums import Operation, PaymentStatus, Resource
from schemas.base_schemas import CursorPage, PaginatedResponse
from schemas.billing_schemas import (
    Billing,
    BillingCreate,
    BillingStatusUpdate,
    BillingUpdate,
    Invoice,
)
from services.billing_service import billing_service
from utils.exceptions import ValidationError
from utils.rate_limiter import limiter
from utils.logger import setup_logger

router = APIRouter(prefix="/billings", tags=["billings"])
logger = setup_logger("BILLING_ROUTES")

can_read = ResourceGuard(Resource.BILLINGS, Operation.READ)
can_write = ResourceGuard(Resource.BILLINGS, Operation.WRITE)


def billing_filters(
    patient_id: Optional[str] = Query(None, alias="patientId"),
    status: Optional[PaymentStatus] = Query(None),
    admission_id: Optional[str] = Query(None, alias="admissionId"),
) -> dict:
    return {"patientId": patient_id, "status": status, "admissionId": admission_id}


@router.get("", response_model=PaginatedResponse[Billing], summary="List bills")
async def list_billings(
    filters: dict = Depends(billing_filters),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await billing_service.list(store, filters, page, limit)


@router.get("/cursor", response_model=CursorPage[Billing], summary="Page through bills")
async def page_billings(
    filters: dict = Depends(billing_filters),
    cursor: Optional[str] = None,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await billing_service.fetch_page(store, filters, cursor, limit)


@router.post(
    "",
    response_model=Billing,
    status_code=status.HTTP_201_CREATED,
    summary="Create bill",
    description="The invoice number is generated as INV-{year}-{4 digits}",
)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_billing(
    request: Request,
    billing_data: BillingCreate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    return await billing_service.create(store, billing_data, current_user)


@router.get("/{billing_id}", response_model=Billing, summary="Get bill")
async def get_billing(
    billing_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await billing_service.get(store, billing_id)


@router.get("/{billing_id}/invoice", response_model=Invoice, summary="Get invoice")
async def get_invoice(
    billing_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    """Bill with subtotal, tax and grand total"""
    return await billing_service.get_invoice(store, billing_id)


@router.patch("/{billing_id}", response_model=Billing, summary="Update bill")
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_billing(
    request: Request,
    billing_id: str,
    billing_data: BillingUpdate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    return await billing_service.update(store, billing_id, billing_data, current_user)


@router.patch("/{billing_id}/status", response_model=Billing, summary="Mark bill paid")
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_billing_status(
    request: Request,
    billing_id: str,
    status_data: BillingStatusUpdate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    """Pending -> paid; paid bills cannot be reopened"""
    if status_data.status != PaymentStatus.PAID.value:
        raise ValidationError("Bills can only move from pending to paid")
    return await billing_service.mark_paid(store, billing_id, current_user)
