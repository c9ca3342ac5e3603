# src/schemas/user_schemas.py
from pydantic import EmailStr, Field
from typing import List, Optional
from models.enums import UserRole
from .base_schemas import BaseSchema, WriteSchema, IDMixin, CreatedMixin


class UserBase(BaseSchema):
    """Base profile schema"""

    email: EmailStr
    display_name: Optional[str] = None
    role: UserRole
    permissions: List[str] = Field(default_factory=list)
    doctor_id: Optional[str] = None
    hospital_id: Optional[str] = None
    affiliate_id: Optional[str] = None


class StaffCreate(UserBase, WriteSchema):
    """Profile for an account already provisioned at the identity provider"""

    uid: str = Field(..., min_length=1, description="Identity provider subject id")


class StaffUpdate(WriteSchema):
    display_name: Optional[str] = None
    role: Optional[UserRole] = None
    permissions: Optional[List[str]] = None
    is_active: Optional[bool] = None
    doctor_id: Optional[str] = None
    hospital_id: Optional[str] = None


class UserProfile(IDMixin, UserBase, CreatedMixin):
    """Stored user profile; ``role`` drives authorization"""

    uid: str
    is_active: bool = True
