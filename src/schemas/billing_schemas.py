# src/schemas/billing_schemas.py
from pydantic import Field
from typing import List, Optional
from datetime import datetime
from models.enums import PaymentStatus
from .base_schemas import BaseSchema, WriteSchema, IDMixin, CreatedMixin, AuthorMixin


class BillingItem(BaseSchema):
    """Single invoice line"""

    description: str
    amount: float = Field(..., ge=0)
    quantity: int = Field(1, ge=1)


class BillingBase(BaseSchema):
    patient_id: str
    admission_id: Optional[str] = None
    amount: float = Field(..., ge=0)
    items: Optional[List[BillingItem]] = None


class BillingCreate(BillingBase, WriteSchema):
    """Schema for creating a bill; the invoice number is generated"""


class BillingUpdate(WriteSchema):
    """Schema for updating a bill"""

    amount: Optional[float] = Field(None, ge=0)
    items: Optional[List[BillingItem]] = None
    status: Optional[PaymentStatus] = None
    paid_at: Optional[datetime] = None


class BillingStatusUpdate(WriteSchema):
    status: PaymentStatus


class Billing(IDMixin, BillingBase, AuthorMixin, CreatedMixin):
    """Stored billing document"""

    invoice_number: str
    status: PaymentStatus = PaymentStatus.PENDING
    paid_at: Optional[datetime] = None


class InvoiceTotals(BaseSchema):
    subtotal: float
    tax_rate: float
    tax: float
    discount: float = 0.0
    total: float


class Invoice(Billing):
    """Printable invoice: billing document plus computed totals"""

    totals: InvoiceTotals
