# src/routes/affiliate_accounts.py
from fastapi import APIRouter, Body, Depends, Query, Request, status
from typing import Any, Optional
from core.config import settings
from core.dependencies import ResourceGuard, get_store
from db.document_store import DocumentStore
from models.enums import AccountStatus, AccountType, Operation, Resource
from schemas.affiliate_schemas import (
    AccountPayment,
    AccountStatusSummary,
    AffiliateAccount,
    AffiliateAccountCreate,
)
from schemas.base_schemas import CursorPage, PaginatedResponse
from services.affiliate_service import affiliate_account_service
from utils.rate_limiter import limiter
from utils.logger import setup_logger

router = APIRouter(prefix="/affiliate-accounts", tags=["affiliate-accounts"])
logger = setup_logger("AFFILIATE_ACCOUNT_ROUTES")

can_read = ResourceGuard(Resource.AFFILIATE_ACCOUNTS, Operation.READ)
can_write = ResourceGuard(Resource.AFFILIATE_ACCOUNTS, Operation.WRITE)
can_read_payments = ResourceGuard(Resource.PAYMENTS, Operation.READ)
can_write_payments = ResourceGuard(Resource.PAYMENTS, Operation.WRITE)


def account_filters(
    affiliate_id: Optional[str] = Query(None, alias="affiliateId"),
    account_type: Optional[AccountType] = Query(None, alias="accountType"),
    status: Optional[AccountStatus] = Query(None),
) -> dict:
    return {"affiliateId": affiliate_id, "accountType": account_type, "status": status}


@router.get("", response_model=PaginatedResponse[AffiliateAccount], summary="List accounts")
async def list_accounts(
    filters: dict = Depends(account_filters),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await affiliate_account_service.list(store, filters, page, limit)


@router.get("/cursor", response_model=CursorPage[AffiliateAccount], summary="Page through accounts")
async def page_accounts(
    filters: dict = Depends(account_filters),
    cursor: Optional[str] = None,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await affiliate_account_service.fetch_page(store, filters, cursor, limit)


@router.get("/summary", response_model=AccountStatusSummary, summary="Account status summary")
async def account_summary(
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    """Counts by type and status for the caller's accounts, with monthly revenue"""
    return await affiliate_account_service.status_summary(store, current_user.id)


@router.post(
    "",
    response_model=AffiliateAccount,
    status_code=status.HTTP_201_CREATED,
    summary="Onboard account",
    description="Starts pending until paid, or as a trial when requested",
)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_account(
    request: Request,
    account_data: AffiliateAccountCreate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    return await affiliate_account_service.create(store, account_data, current_user)


@router.get("/{account_id}", response_model=AffiliateAccount, summary="Get account")
async def get_account(
    account_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await affiliate_account_service.get(store, account_id)


@router.patch(
    "/{account_id}/mark-paid", response_model=AffiliateAccount, summary="Record payment"
)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def mark_account_paid(
    request: Request,
    account_id: str,
    notes: Optional[str] = Body(None, embed=True),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
    _: Any = Depends(can_write_payments),
) -> Any:
    """Activate the account and append a payment for its plan amount"""
    return await affiliate_account_service.mark_paid(
        store, account_id, current_user, notes=notes
    )


@router.get(
    "/{account_id}/payments",
    response_model=PaginatedResponse[AccountPayment],
    summary="Payment history",
)
async def list_account_payments(
    account_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
    _: Any = Depends(can_read_payments),
) -> Any:
    return await affiliate_account_service.list_payments(store, account_id, page, limit)
