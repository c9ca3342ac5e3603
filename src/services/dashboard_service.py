# src/services/dashboard_service.py
from typing import Any, Dict, List, Mapping, Optional
from core.config import settings
from core.permissions import authorization_guard
from db.query import GTE, FieldFilter
from models.enums import AccountType, Operation, Resource, UserRole
from schemas.affiliate_schemas import CommissionSummary
from schemas.response_schemas import AccountCounts, AdmissionBreakdown, DashboardStats
from utils.business_rules import admission_breakdown, summarize_commissions, total_amount
from utils.logger import setup_logger
from utils.time_utils import iso_days_ago, iso_start_of_today, utc_now
from . import pagination
from .query_builder import build_query

logger = setup_logger("DASHBOARD_SERVICE")


class DashboardService:
    """Role-dependent statistics computed from already-fetched documents"""

    def __init__(self, window_days: Optional[int] = None):
        self.window_days = window_days or settings.DASHBOARD_WINDOW_DAYS

    async def _collect(
        self,
        store,
        resource: Resource,
        filters: Optional[Mapping[str, Any]] = None,
        since: Optional[str] = None,
        since_field: str = "createdAt",
    ) -> List[Dict[str, Any]]:
        query = build_query(resource, filters)
        if since is not None:
            query = query.where(FieldFilter(since_field, GTE, since))

        documents: List[Dict[str, Any]] = []
        async for page in pagination.iterate(store, query, settings.MAX_PAGE_SIZE):
            documents.extend(page)
        return documents

    def _can_read(self, user, resource: Resource) -> bool:
        return authorization_guard.is_allowed(user.role, resource, Operation.READ)

    async def get_dashboard_stats(self, store, user) -> DashboardStats:
        """Only sections whose collections the caller's role may read are filled"""
        authorization_guard.require_active(user)
        if user.role == UserRole.AFFILIATE.value:
            return await self.get_affiliate_stats(store, user)
        return await self.get_clinic_stats(store, user)

    async def get_clinic_stats(self, store, user) -> DashboardStats:
        """Patients, recent admissions, revenue and today's treatment logs"""
        since = iso_days_ago(self.window_days)
        stats = DashboardStats(role=user.role, window_days=self.window_days)

        if self._can_read(user, Resource.PATIENTS):
            stats.total_patients = await store.count(build_query(Resource.PATIENTS))

        if self._can_read(user, Resource.ADMISSIONS):
            admissions = await self._collect(store, Resource.ADMISSIONS, since=since)
            stats.admissions = AdmissionBreakdown(**admission_breakdown(admissions))

        if self._can_read(user, Resource.BILLINGS):
            billings = await self._collect(store, Resource.BILLINGS, since=since)
            stats.revenue = total_amount(billings)

        if self._can_read(user, Resource.TREATMENT_LOGS):
            stats.appointments = await store.count(
                build_query(Resource.TREATMENT_LOGS).where(
                    FieldFilter("createdAt", GTE, iso_start_of_today())
                )
            )

        logger.debug(f"Clinic dashboard for {user.id} ({user.role}) computed")
        return stats

    async def get_affiliate_stats(self, store, user) -> DashboardStats:
        """Onboarded accounts, recent commission and this year's monthly trend"""
        since = iso_days_ago(self.window_days)
        stats = DashboardStats(role=user.role, window_days=self.window_days)
        mine = {"affiliateId": user.id}

        if self._can_read(user, Resource.AFFILIATE_ACCOUNTS):
            accounts = await self._collect(store, Resource.AFFILIATE_ACCOUNTS, mine)
            doctors = sum(
                1 for a in accounts if a.get("accountType") == AccountType.DOCTOR.value
            )
            hospitals = sum(
                1 for a in accounts if a.get("accountType") == AccountType.HOSPITAL.value
            )
            stats.accounts = AccountCounts(
                total=doctors + hospitals, doctors=doctors, hospitals=hospitals
            )

        if self._can_read(user, Resource.AFFILIATE_TRACKING):
            recent = await self._collect(
                store, Resource.AFFILIATE_TRACKING, mine, since=since
            )
            this_year = await self._collect(
                store, Resource.AFFILIATE_TRACKING, {**mine, "year": utc_now().year}
            )
            stats.commission = CommissionSummary(**summarize_commissions(recent))
            stats.monthly_revenue = summarize_commissions(this_year)["monthly"]

        return stats


dashboard_service = DashboardService()
