# src/schemas/affiliate_schemas.py
from pydantic import EmailStr, Field
from typing import Dict, Optional
from datetime import datetime
from models.enums import AccountType, AccountStatus, PaymentStatus
from .base_schemas import BaseSchema, WriteSchema, IDMixin, CreatedMixin


# Commission tracking


class AffiliateTrackingBase(BaseSchema):
    user_id: str
    user_type: AccountType
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)
    user_name: Optional[str] = None


class AffiliateTrackingCreate(AffiliateTrackingBase, WriteSchema):
    """Monthly commission entry; amount defaults to the plan commission"""

    affiliate_id: Optional[str] = None
    amount: Optional[float] = Field(None, ge=0)


class AffiliateTracking(IDMixin, AffiliateTrackingBase, CreatedMixin):
    affiliate_id: str
    amount: float
    status: PaymentStatus = PaymentStatus.PENDING
    paid_at: Optional[datetime] = None


class CommissionSummary(BaseSchema):
    total: float = 0.0
    pending: float = 0.0
    paid: float = 0.0
    records: int = 0
    monthly: Dict[str, float] = Field(default_factory=dict)


# Onboarded doctor/hospital accounts


class AffiliateAccountBase(BaseSchema):
    name: str = Field(..., min_length=1)
    email: EmailStr
    contact: str
    address: Optional[str] = None
    account_type: AccountType
    plan_type: str = "standard"
    # Doctor accounts
    registration_number: Optional[str] = None
    specialization: Optional[str] = None
    # Hospital accounts
    hospital_name: Optional[str] = None
    hospital_type: Optional[str] = None
    bed_count: Optional[int] = Field(None, ge=0)


class AffiliateAccountCreate(AffiliateAccountBase, WriteSchema):
    """New account; plan amount defaults by account type"""

    uid: Optional[str] = None
    plan_amount: Optional[float] = Field(None, ge=0)
    trial: bool = False


class AffiliateAccount(IDMixin, AffiliateAccountBase, CreatedMixin):
    uid: Optional[str] = None
    affiliate_id: str
    plan_amount: float
    status: AccountStatus = AccountStatus.PENDING
    plan_start: Optional[datetime] = None
    plan_end: Optional[datetime] = None
    last_payment: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        if self.account_type == AccountType.HOSPITAL.value and self.hospital_name:
            return self.hospital_name
        return self.name


class AccountPayment(IDMixin, BaseSchema):
    account_id: str
    account_type: AccountType
    account_name: str
    amount: float
    date: datetime
    method: str = "manual"
    status: str = "completed"
    created_by: Optional[str] = None
    notes: Optional[str] = None


class AccountStatusSummary(BaseSchema):
    total: int = 0
    by_type: Dict[str, int] = Field(default_factory=dict)
    by_status: Dict[str, int] = Field(default_factory=dict)
    monthly_revenue: float = 0.0
    monthly_commission: float = 0.0
