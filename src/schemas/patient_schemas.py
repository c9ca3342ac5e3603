# src/schemas/patient_schemas.py
from pydantic import Field
from typing import Optional
from models.enums import GenderEnum
from .base_schemas import BaseSchema, WriteSchema, IDMixin, CreatedMixin, AuthorMixin


class PatientBase(BaseSchema):
    """Base patient schema"""

    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0, le=150)
    gender: GenderEnum
    contact: str = Field(..., min_length=1)
    address: Optional[str] = None
    allergies: Optional[str] = None
    blood_group: Optional[str] = None
    doctor_id: Optional[str] = None


class PatientCreate(PatientBase, WriteSchema):
    """Schema for registering a patient"""


class PatientUpdate(WriteSchema):
    """Schema for updating a patient"""

    name: Optional[str] = Field(None, min_length=1)
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[GenderEnum] = None
    contact: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    allergies: Optional[str] = None
    blood_group: Optional[str] = None
    doctor_id: Optional[str] = None


class Patient(IDMixin, PatientBase, AuthorMixin, CreatedMixin):
    """Stored patient document"""
