# src/routes/admissions.py
from fastapi import APIRouter, Depends, Query, Request, status
from typing import Any, Optional
from core.config import settings
from core.dependencies import ResourceGuard, get_store
from db.document_store import DocumentStore
from models.enums import AdmissionStatus, AdmissionType, Operation, Resource
from schemas.admission_schemas import Admission, AdmissionCreate, AdmissionUpdate
from schemas.base_schemas import CursorPage, PaginatedResponse
from services.admission_service import admission_service
from utils.rate_limiter import limiter
from utils.logger import setup_logger

router = APIRouter(prefix="/admissions", tags=["admissions"])
logger = setup_logger("ADMISSION_ROUTES")

can_read = ResourceGuard(Resource.ADMISSIONS, Operation.READ)
can_write = ResourceGuard(Resource.ADMISSIONS, Operation.WRITE)


def admission_filters(
    patient_id: Optional[str] = Query(None, alias="patientId"),
    status: Optional[AdmissionStatus] = Query(None),
    admission_type: Optional[AdmissionType] = Query(None, alias="admissionType"),
    doctor_id: Optional[str] = Query(None, alias="doctorId"),
) -> dict:
    return {
        "patientId": patient_id,
        "status": status,
        "admissionType": admission_type,
        "doctorId": doctor_id,
    }


@router.get(
    "",
    response_model=PaginatedResponse[Admission],
    summary="List admissions",
    description="Most recent admission date first; all filters are combined",
)
async def list_admissions(
    filters: dict = Depends(admission_filters),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await admission_service.list(store, filters, page, limit)


@router.get("/cursor", response_model=CursorPage[Admission], summary="Page through admissions")
async def page_admissions(
    filters: dict = Depends(admission_filters),
    cursor: Optional[str] = None,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await admission_service.fetch_page(store, filters, cursor, limit)


@router.post(
    "",
    response_model=Admission,
    status_code=status.HTTP_201_CREATED,
    summary="Admit patient",
    description="OPD or IPD intake; the admission date defaults to now",
)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_admission(
    request: Request,
    admission_data: AdmissionCreate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    logger.info(
        f"Admitting patient {admission_data.patient_id} as {admission_data.admission_type}"
    )
    return await admission_service.create(store, admission_data, current_user)


@router.get("/{admission_id}", response_model=Admission, summary="Get admission")
async def get_admission(
    admission_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await admission_service.get(store, admission_id)


@router.patch("/{admission_id}", response_model=Admission, summary="Update admission")
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_admission(
    request: Request,
    admission_id: str,
    admission_data: AdmissionUpdate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    return await admission_service.update(store, admission_id, admission_data, current_user)


@router.patch(
    "/{admission_id}/discharge", response_model=Admission, summary="Discharge patient"
)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def discharge_admission(
    request: Request,
    admission_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    """Active -> discharged; the discharge date is set to now"""
    return await admission_service.discharge(store, admission_id, current_user)
