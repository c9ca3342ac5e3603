# src/services/billing_service.py
from models.enums import ActivityType, PaymentStatus, Resource
from schemas.billing_schemas import Invoice, InvoiceTotals
from utils.business_rules import generate_invoice_number, invoice_totals
from utils.exceptions import ValidationError
from utils.logger import setup_logger
from utils.time_utils import iso_now, utc_now
from .activity_service import activity_service
from .base_service import DocumentService

logger = setup_logger("BILLING_SERVICE")


class BillingService(DocumentService):
    one_way = {"status": PaymentStatus.PAID.value}

    def __init__(self):
        super().__init__(Resource.BILLINGS)

    async def prepare_create(self, store, data, actor):
        data["invoiceNumber"] = generate_invoice_number(utc_now())
        data["status"] = PaymentStatus.PENDING.value
        return data

    async def prepare_update(self, store, current, changes, actor):
        paid = PaymentStatus.PAID.value
        if changes.get("status") == paid and current.get("status") != paid:
            changes.setdefault("paidAt", iso_now())
        return changes

    async def mark_paid(self, store, billing_id: str, actor=None):
        """Settle a pending bill and note the payment in the activity feed"""
        current = await self.get(store, billing_id)
        if current.status == PaymentStatus.PAID.value:
            raise ValidationError(f"Billing {billing_id} is already paid")

        billing = await self.apply_update(
            store, billing_id, {"status": PaymentStatus.PAID.value}, actor
        )
        await activity_service.record(
            store,
            ActivityType.PAYMENT_RECEIVED,
            title="Payment Received",
            description=f"Invoice {billing.invoice_number} was paid",
            user_id=actor.id if actor else None,
            related_id=billing.id,
        )
        return billing

    async def get_invoice(self, store, billing_id: str) -> Invoice:
        """Billing document with subtotal, tax and grand total"""
        billing = await self.get(store, billing_id)
        items = [item.model_dump() for item in billing.items or []]
        if not items:
            # A bill without line items is invoiced as a single line
            items = [{"description": "Charges", "amount": billing.amount, "quantity": 1}]

        totals = InvoiceTotals(**invoice_totals(items))
        return Invoice(**billing.model_dump(), totals=totals)


billing_service = BillingService()
