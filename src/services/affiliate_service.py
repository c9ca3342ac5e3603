# src/services/affiliate_service.py
from typing import Optional
from models.enums import (
    AccountStatus,
    AccountType,
    ActivityType,
    PaymentStatus,
    Resource,
)
from schemas.affiliate_schemas import (
    AccountStatusSummary,
    CommissionSummary,
)
from utils.business_rules import (
    account_status_summary,
    commission_for,
    plan_amount_for,
    summarize_commissions,
    trial_end,
)
from utils.exceptions import ValidationError
from utils.logger import setup_logger
from utils.time_utils import iso_now, to_iso, utc_now
from .activity_service import activity_service
from .base_service import DocumentService
from .resources import get_resource_config

logger = setup_logger("AFFILIATE_SERVICE")


class AffiliateTrackingService(DocumentService):
    """Monthly commission records earned by affiliates"""

    one_way = {"status": PaymentStatus.PAID.value}

    def __init__(self):
        super().__init__(Resource.AFFILIATE_TRACKING)

    async def prepare_create(self, store, data, actor):
        if "affiliateId" not in data:
            if actor is None:
                raise ValidationError("affiliateId is required")
            data["affiliateId"] = actor.id
        if "amount" not in data:
            data["amount"] = commission_for(plan_amount_for(data["userType"]))
        data["status"] = PaymentStatus.PENDING.value
        return data

    async def mark_paid(self, store, tracking_id: str, actor=None):
        current = await self.get(store, tracking_id)
        if current.status == PaymentStatus.PAID.value:
            raise ValidationError(f"Commission {tracking_id} is already paid")

        record = await self.apply_update(
            store,
            tracking_id,
            {"status": PaymentStatus.PAID.value, "paidAt": iso_now()},
            actor,
        )
        await activity_service.record(
            store,
            ActivityType.COMMISSION_RECEIVED,
            title="Commission Received",
            description=f"Commission of {record.amount} for {record.month}/{record.year} paid",
            user_id=record.affiliate_id,
            related_id=record.id,
        )
        return record

    async def commission_stats(self, store, affiliate_id: str) -> CommissionSummary:
        records = await self.find_all(store, {"affiliateId": affiliate_id})
        return CommissionSummary(**summarize_commissions(records))


class AffiliateAccountService(DocumentService):
    """Doctor and hospital subscriptions onboarded by an affiliate"""

    def __init__(self):
        super().__init__(Resource.AFFILIATE_ACCOUNTS)
        self.payments = get_resource_config(Resource.PAYMENTS)

    async def prepare_create(self, store, data, actor):
        if actor is None:
            raise ValidationError("Accounts must be created by an affiliate")

        trial = data.pop("trial", False)
        data["affiliateId"] = actor.id
        data.setdefault("planAmount", plan_amount_for(data["accountType"]))

        if trial:
            start = utc_now()
            data["status"] = AccountStatus.TRIAL.value
            data["planStart"] = to_iso(start)
            data["planEnd"] = to_iso(trial_end(start))
        else:
            # Pending until the first payment is recorded
            data["status"] = AccountStatus.PENDING.value
        return data

    async def after_create(self, store, document, actor) -> None:
        if document.account_type == AccountType.HOSPITAL.value:
            activity, title = ActivityType.HOSPITAL_ACCOUNT_CREATED, "Hospital Account Created"
        else:
            activity, title = ActivityType.DOCTOR_ACCOUNT_CREATED, "Doctor Account Created"

        await activity_service.record(
            store,
            activity,
            title=title,
            description=f"{document.display_name} was onboarded",
            user_id=actor.id if actor else None,
            related_id=document.id,
        )

    async def mark_paid(
        self,
        store,
        account_id: str,
        actor=None,
        method: str = "manual",
        notes: Optional[str] = None,
    ):
        """Activate the account and append a payment for its plan amount"""
        account = await self.get(store, account_id)
        if account.status == AccountStatus.SUSPENDED.value:
            raise ValidationError(f"Account {account_id} is suspended")

        now = iso_now()
        updated = await self.apply_update(
            store,
            account_id,
            {"status": AccountStatus.ACTIVE.value, "lastPayment": now},
            actor,
        )

        payment = {
            "accountId": account.id,
            "accountType": account.account_type,
            "accountName": account.display_name,
            "amount": account.plan_amount,
            "date": now,
            "method": method,
            "status": "completed",
            "createdBy": actor.id if actor else None,
            "notes": notes or "Manually marked as paid by affiliate",
        }
        snapshot = await store.add(self.payments.collection, payment)
        logger.info(
            f"Recorded payment {snapshot['id']} of {account.plan_amount} for account {account_id}"
        )
        return updated

    async def list_payments(self, store, account_id: str, page: int = 1, limit=None):
        await self.get(store, account_id)
        return await payment_service.list(store, {"accountId": account_id}, page, limit)

    async def status_summary(self, store, affiliate_id: str) -> AccountStatusSummary:
        accounts = await self.find_all(store, {"affiliateId": affiliate_id})
        return AccountStatusSummary(**account_status_summary(accounts))


class PaymentService(DocumentService):
    def __init__(self):
        super().__init__(Resource.PAYMENTS)


affiliate_tracking_service = AffiliateTrackingService()
affiliate_account_service = AffiliateAccountService()
payment_service = PaymentService()
