# src/schemas/admission_schemas.py
from datetime import datetime
from typing import Optional
from models.enums import AdmissionType, AdmissionStatus
from .base_schemas import BaseSchema, WriteSchema, IDMixin, CreatedMixin, AuthorMixin


class AdmissionBase(BaseSchema):
    """Base admission schema"""

    patient_id: str
    admission_type: AdmissionType
    doctor_id: str
    room_number: Optional[str] = None
    note: Optional[str] = None


class AdmissionCreate(AdmissionBase, WriteSchema):
    """Schema for an OPD/IPD intake; admission date defaults to now"""

    admission_date: Optional[datetime] = None


class AdmissionUpdate(WriteSchema):
    """Schema for updating an admission"""

    room_number: Optional[str] = None
    doctor_id: Optional[str] = None
    note: Optional[str] = None
    status: Optional[AdmissionStatus] = None
    discharge_date: Optional[datetime] = None


class Admission(IDMixin, AdmissionBase, AuthorMixin, CreatedMixin):
    """Stored admission document"""

    admission_date: datetime
    discharge_date: Optional[datetime] = None
    status: AdmissionStatus = AdmissionStatus.ACTIVE
