import random
from datetime import datetime, timezone

import pytest

from utils.business_rules import (
    account_status_summary,
    admission_breakdown,
    commission_for,
    generate_invoice_number,
    invoice_totals,
    plan_amount_for,
    summarize_commissions,
    total_amount,
    trial_end,
)
from utils.time_utils import to_iso


def test_invoice_number_uses_year_and_four_digits():
    number = generate_invoice_number(datetime(2025, 3, 9), rng=random.Random(7))
    prefix, year, suffix = number.split("-")
    assert (prefix, year) == ("INV", "2025")
    assert 1000 <= int(suffix) <= 9999


def test_invoice_totals_with_discount():
    totals = invoice_totals(
        [{"amount": 100, "quantity": 3}, {"amount": 50}], tax_rate=0.1, discount=20
    )
    assert totals == {
        "subtotal": 350,
        "tax_rate": 0.1,
        "tax": 35,
        "discount": 20,
        "total": 365,
    }


def test_invoice_totals_default_tax_rate():
    assert invoice_totals([{"amount": 1000}])["tax"] == 180


def test_plan_amounts_and_commission():
    assert plan_amount_for("doctor") == 3500
    assert plan_amount_for("hospital") == 6000
    assert commission_for(3500) == 700
    assert commission_for(6000) == 1200
    with pytest.raises(ValueError):
        plan_amount_for("clinic")


def test_trial_lasts_seven_days():
    start = datetime(2024, 2, 25, tzinfo=timezone.utc)
    assert trial_end(start) == datetime(2024, 3, 3, tzinfo=timezone.utc)


def test_commission_summary():
    summary = summarize_commissions(
        [
            {"amount": 700, "status": "paid", "month": 1, "year": 2024},
            {"amount": 1200, "status": "pending", "month": 1, "year": 2024},
            {"amount": 700, "status": "pending", "month": 12, "year": 2023},
            {"status": "pending"},
        ]
    )
    assert summary["total"] == 2600
    assert summary["pending"] == 1900
    assert summary["paid"] == 700
    assert summary["records"] == 4
    assert list(summary["monthly"].items()) == [("2023-12", 700), ("2024-01", 1900)]


def test_account_status_summary():
    summary = account_status_summary(
        [
            {"accountType": "doctor", "status": "active", "planAmount": 3500},
            {"accountType": "hospital", "status": "active"},
            {"accountType": "doctor", "status": "pending", "planAmount": 3500},
            {"accountType": "doctor", "status": "trial"},
        ]
    )
    assert summary["total"] == 4
    assert summary["by_type"] == {"doctor": 3, "hospital": 1}
    assert summary["by_status"] == {"active": 2, "pending": 1, "trial": 1}
    assert summary["monthly_revenue"] == 9500
    assert summary["monthly_commission"] == 1900


def test_admission_breakdown_and_totals():
    admissions = [{"admissionType": "OPD"}, {"admissionType": "IPD"}, {"admissionType": "OPD"}]
    assert admission_breakdown(admissions) == {"total": 3, "opd": 2, "ipd": 1}
    assert total_amount([{"amount": 10.5}, {"amount": 4.5}, {}]) == 15


def test_iso_timestamps_are_utc_and_sortable():
    naive = datetime(2024, 1, 1, 10, 0)
    aware = datetime(2024, 1, 1, 9, 59, 59, 999999, tzinfo=timezone.utc)
    assert to_iso(naive) == "2024-01-01T10:00:00.000000+00:00"
    assert to_iso(aware) < to_iso(naive)
