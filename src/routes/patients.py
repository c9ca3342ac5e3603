# src/routes/patients.py
from fastapi import APIRouter, Depends, Query, Request, status
from typing import Any, Optional
from core.config import settings
from core.dependencies import ResourceGuard, get_store
from db.document_store import DocumentStore
from models.enums import Operation, Resource
from schemas.base_schemas import CursorPage, PaginatedResponse
from schemas.patient_schemas import Patient, PatientCreate, PatientUpdate
from services.patient_service import patient_service
from utils.rate_limiter import limiter
from utils.logger import setup_logger

router = APIRouter(prefix="/patients", tags=["patients"])
logger = setup_logger("PATIENT_ROUTES")

can_read = ResourceGuard(Resource.PATIENTS, Operation.READ)
can_write = ResourceGuard(Resource.PATIENTS, Operation.WRITE)


@router.get(
    "",
    response_model=PaginatedResponse[Patient],
    summary="List patients",
    description="Newest first, optionally filtered by assigned doctor",
)
async def list_patients(
    doctor_id: Optional[str] = Query(None, alias="doctorId"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await patient_service.list(store, {"doctorId": doctor_id}, page, limit)


@router.get(
    "/cursor",
    response_model=CursorPage[Patient],
    summary="Page through patients",
    description="Forward-only pagination; pass the returned cursor to get the next page",
)
async def page_patients(
    doctor_id: Optional[str] = Query(None, alias="doctorId"),
    cursor: Optional[str] = None,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await patient_service.fetch_page(store, {"doctorId": doctor_id}, cursor, limit)


@router.post(
    "",
    response_model=Patient,
    status_code=status.HTTP_201_CREATED,
    summary="Register patient",
)
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def create_patient(
    request: Request,
    patient_data: PatientCreate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    """Register a patient and log the registration"""
    logger.info(f"Registering patient for user: {current_user.id}")
    return await patient_service.create(store, patient_data, current_user)


@router.get("/{patient_id}", response_model=Patient, summary="Get patient")
async def get_patient(
    patient_id: str,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_read),
) -> Any:
    return await patient_service.get(store, patient_id)


@router.patch("/{patient_id}", response_model=Patient, summary="Update patient")
@limiter.limit(settings.WRITE_RATE_LIMIT)
async def update_patient(
    request: Request,
    patient_id: str,
    patient_data: PatientUpdate,
    store: DocumentStore = Depends(get_store),
    current_user: Any = Depends(can_write),
) -> Any:
    """Partial update: only supplied fields change"""
    return await patient_service.update(store, patient_id, patient_data, current_user)
