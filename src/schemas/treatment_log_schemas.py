# src/schemas/treatment_log_schemas.py
from pydantic import Field
from typing import Dict, List, Optional
from .base_schemas import BaseSchema, WriteSchema, IDMixin, CreatedMixin, AuthorMixin


class Medication(BaseSchema):
    name: str
    dosage: str
    frequency: Optional[str] = None
    duration: Optional[str] = None


class TreatmentLogBase(BaseSchema):
    patient_id: str
    admission_id: Optional[str] = None
    title: Optional[str] = None
    notes: str = Field(..., min_length=1)
    vitals: Optional[Dict[str, str]] = None
    medications: Optional[List[Medication]] = None
    treatments: Optional[List[str]] = None
    doctor_id: Optional[str] = None


class TreatmentLogCreate(TreatmentLogBase, WriteSchema):
    """Treatment logs are append-only; there is no update schema"""


class TreatmentLog(IDMixin, TreatmentLogBase, AuthorMixin, CreatedMixin):
    """Stored treatment log document"""
