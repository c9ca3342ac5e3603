# src/utils/business_rules.py
"""Pure computations over already-fetched documents.

Rates and plan amounts come from settings; nothing here touches the store.
"""
import random
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional

from core.config import settings


def generate_invoice_number(now: datetime, rng: Optional[random.Random] = None) -> str:
    """INV-{year}-{1000..9999}; uniqueness is not checked against the store"""
    rng = rng or random
    return f"INV-{now.year}-{rng.randint(1000, 9999)}"


def invoice_totals(
    items: Iterable[Mapping[str, Any]],
    tax_rate: Optional[float] = None,
    discount: float = 0.0,
) -> Dict[str, float]:
    """Subtotal of amount x quantity, tax on the subtotal, minus discount"""
    rate = settings.INVOICE_TAX_RATE if tax_rate is None else tax_rate
    subtotal = sum(
        float(item.get("amount", 0)) * int(item.get("quantity") or 1) for item in items
    )
    tax = subtotal * rate
    return {
        "subtotal": round(subtotal, 2),
        "tax_rate": rate,
        "tax": round(tax, 2),
        "discount": round(discount, 2),
        "total": round(subtotal + tax - discount, 2),
    }


def plan_amount_for(account_type: str) -> int:
    if account_type == "hospital":
        return settings.HOSPITAL_PLAN_AMOUNT
    if account_type == "doctor":
        return settings.DOCTOR_PLAN_AMOUNT
    raise ValueError(f"Unknown account type: {account_type}")


def commission_for(plan_amount: float, rate: Optional[float] = None) -> float:
    rate = settings.COMMISSION_RATE if rate is None else rate
    return round(plan_amount * rate, 2)


def trial_end(start: datetime, days: Optional[int] = None) -> datetime:
    return start + timedelta(days=settings.TRIAL_PERIOD_DAYS if days is None else days)


def summarize_commissions(records: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Total/pending/paid commission plus a per-month breakdown.

    Months are keyed ``YYYY-MM`` and returned in chronological order.
    """
    total = pending = paid = 0.0
    count = 0
    monthly: Dict[str, float] = {}

    for record in records:
        amount = float(record.get("amount") or 0)
        total += amount
        count += 1
        if record.get("status") == "pending":
            pending += amount
        elif record.get("status") == "paid":
            paid += amount

        month = record.get("month")
        year = record.get("year")
        if month is not None and year is not None:
            key = f"{int(year):04d}-{int(month):02d}"
            monthly[key] = monthly.get(key, 0.0) + amount

    return {
        "total": round(total, 2),
        "pending": round(pending, 2),
        "paid": round(paid, 2),
        "records": count,
        "monthly": {key: round(monthly[key], 2) for key in sorted(monthly)},
    }


def account_status_summary(accounts: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Account counts by type and status, with recurring revenue of active accounts"""
    by_type: Dict[str, int] = {}
    by_status: Dict[str, int] = {}
    revenue = 0.0
    total = 0

    for account in accounts:
        total += 1
        account_type = account.get("accountType", "unknown")
        status = account.get("status", "unknown")
        by_type[account_type] = by_type.get(account_type, 0) + 1
        by_status[status] = by_status.get(status, 0) + 1
        if status == "active":
            amount = account.get("planAmount")
            if amount is None:
                amount = plan_amount_for(account_type)
            revenue += float(amount)

    return {
        "total": total,
        "by_type": by_type,
        "by_status": by_status,
        "monthly_revenue": round(revenue, 2),
        "monthly_commission": commission_for(revenue),
    }


def admission_breakdown(admissions: Iterable[Mapping[str, Any]]) -> Dict[str, int]:
    opd = ipd = 0
    for admission in admissions:
        if admission.get("admissionType") == "OPD":
            opd += 1
        elif admission.get("admissionType") == "IPD":
            ipd += 1
    return {"total": opd + ipd, "opd": opd, "ipd": ipd}


def total_amount(documents: List[Mapping[str, Any]]) -> float:
    return round(sum(float(doc.get("amount") or 0) for doc in documents), 2)
