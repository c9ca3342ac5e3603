# src/routes/__init__.py
from .users import router as users_router
from .patients import router as patients_router
from .admissions import router as admissions_router
from .treatment_logs import router as treatment_logs_router
from .billings import router as billings_router
from .inventory import router as inventory_router
from .diet_plans import router as diet_plans_router
from .staff import router as staff_router
from .affiliate_tracking import router as affiliate_tracking_router
from .affiliate_accounts import router as affiliate_accounts_router
from .activity_logs import router as activity_logs_router
from .dashboard import router as dashboard_router

__all__ = [
    "users_router",
    "patients_router",
    "admissions_router",
    "treatment_logs_router",
    "billings_router",
    "inventory_router",
    "diet_plans_router",
    "staff_router",
    "affiliate_tracking_router",
    "affiliate_accounts_router",
    "activity_logs_router",
    "dashboard_router",
]
