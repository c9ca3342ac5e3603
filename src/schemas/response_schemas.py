# src/schemas/response_schemas.py
from typing import Dict, Optional
from pydantic import Field
from .base_schemas import BaseSchema
from .affiliate_schemas import CommissionSummary


class AdmissionBreakdown(BaseSchema):
    total: int = 0
    opd: int = 0
    ipd: int = 0


class AccountCounts(BaseSchema):
    total: int = 0
    doctors: int = 0
    hospitals: int = 0


class DashboardStats(BaseSchema):
    """Role-dependent dashboard statistics over the reporting window"""

    role: str
    window_days: int
    total_patients: Optional[int] = None
    admissions: Optional[AdmissionBreakdown] = None
    revenue: Optional[float] = None
    appointments: Optional[int] = None
    accounts: Optional[AccountCounts] = None
    commission: Optional[CommissionSummary] = None
    monthly_revenue: Dict[str, float] = Field(default_factory=dict)


class HealthStatus(BaseSchema):
    status: str
    store: str
    environment: str
