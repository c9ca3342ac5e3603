# src/routes/treatment_logs.py
from fastapi import APIRouter, Depends, Query, Request, status
from typing import Any, Optional
from core.config import settings
from core.dependencies import ResourceGuard, get_store
from db.document_store import DocumentStore
from models.enums import Operation, Resource
from schemas.base_schemas import CursorPage, PaginatedResponse
from schemas.treatment_log_schemas import TreatmentLog, TreatmentLogCreate
from services.treatment_log_service import treatment_log_service
from utils.rate_limiter import limiter
from utils.logger import setup_logger

router = APIRouter(prefix="/treatment-logs", tags=["treatment-logs"])
logger = setup_logger("TREATMENT_LOG_ROUTES")

can_read = ResourceGuard(Resource.TREATMENT_LOGS, Operation.READ)
can_write = ResourceGuard(Resource.TREATMENT_LOGS, Operation.WRITE)


def treatment_log_filters(
    admission_id: Optional[str] = Query(None, alias="admissionId"),
    patient_id: Optional[str] = Query(None, alias="patientId"),
) -> dict:
    return {"admissionId": admission_id, "patientId": patient_id}


@router.get("", response_model=PaginatedResponse[TreatmentLog], summary="List treatment logs")
async def list_treatment_logs(
    filters: dict = Depends(treatment_log_filters),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await treatment_log_service.list(store, filters, page, limit)


@router.get(
    "/cursor", response_model=CursorPage[TreatmentLog], summary="Page through treatment logs"
)
async def page_treatment_logs(
    filters: dict = Depends(treatment_log_filters),
    cursor: Optional[str] = None,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await treatment_log_service.fetch_page(store, filters, cursor, limit)


@router.post(
    "",
    response_model=TreatmentLog,
    status_code=status.HTTP_201_CREATED,
    summary="Add treatment log",
)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_treatment_log(
    request: Request,
    log_data: TreatmentLogCreate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    return await treatment_log_service.create(store, log_data, current_user)


@router.get("/{log_id}", response_model=TreatmentLog, summary="Get treatment log")
async def get_treatment_log(
    log_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await treatment_log_service.get(store, log_id)
