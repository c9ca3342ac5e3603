import re
from datetime import datetime, timezone

import pytest

from models.enums import Resource
from services.activity_service import activity_service
from services.admission_service import admission_service
from services.affiliate_service import (
    affiliate_account_service,
    affiliate_tracking_service,
)
from services.billing_service import billing_service
from services.inventory_service import inventory_service
from services.patient_service import patient_service
from services.treatment_log_service import treatment_log_service
from utils.exceptions import NotFoundError, StoreUnavailableError, ValidationError

RAJ = {"name": "Raj Patel", "age": 42, "gender": "M", "contact": "9990001111"}


class ActivityOutageStore:
    """Passes everything through except appends to the activity log"""

    def __init__(self, inner):
        self.inner = inner

    def __getattr__(self, name):
        return getattr(self.inner, name)

    async def add(self, collection, data):
        if collection == Resource.ACTIVITY_LOGS.value:
            raise StoreUnavailableError("activity log offline")
        return await self.inner.add(collection, data)


async def test_create_patient_as_staff(store, make_user):
    staff = await make_user("staff")

    patient = await patient_service.create(store, RAJ, staff)

    assert patient.id
    assert patient.created_at is not None
    assert patient.created_by_id == staff.id
    assert patient.name == "Raj Patel"
    assert patient.age == 42
    assert patient.gender == "M"
    assert patient.contact == "9990001111"


async def test_create_assigns_identity_and_fresh_timestamp(store):
    started = datetime.now(timezone.utc)

    patient = await patient_service.create(store, RAJ)

    assert patient.id and patient.id not in RAJ.values()
    assert patient.created_at >= started
    assert (await patient_service.get(store, patient.id)).id == patient.id


@pytest.mark.parametrize("field, value", [("id", "mine"), ("createdAt", "2020-01-01T00:00:00Z")])
async def test_caller_cannot_supply_server_fields(recording_store, field, value):
    with pytest.raises(ValidationError):
        await patient_service.create(recording_store, {**RAJ, field: value})
    assert recording_store.calls == []


async def test_malformed_payload_fails_before_store(recording_store):
    with pytest.raises(ValidationError):
        await patient_service.create(recording_store, {"name": "No age", "gender": "X"})
    assert recording_store.calls == []


async def test_update_merges_supplied_fields_only(store):
    patient = await patient_service.create(
        store, {**RAJ, "allergies": "penicillin", "bloodGroup": "O+"}
    )

    await patient_service.update(store, patient.id, {"contact": "8880002222"})
    refetched = await patient_service.get(store, patient.id)

    assert refetched.contact == "8880002222"
    assert refetched.name == patient.name
    assert refetched.age == patient.age
    assert refetched.allergies == "penicillin"
    assert refetched.blood_group == "O+"
    assert refetched.created_at == patient.created_at


async def test_update_cannot_touch_immutable_fields(store):
    patient = await patient_service.create(store, RAJ)
    with pytest.raises(ValidationError):
        await patient_service.update(store, patient.id, {"createdById": "someone-else"})


async def test_mark_billing_paid_keeps_other_fields(store):
    items = [{"description": "Consultation", "amount": 500, "quantity": 1}]
    billing = await billing_service.create(
        store, {"patientId": "p1", "amount": 500, "items": items}
    )
    assert billing.status == "pending"

    paid_at = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    await billing_service.update(store, billing.id, {"status": "paid", "paidAt": paid_at})
    refetched = await billing_service.get(store, billing.id)

    assert refetched.status == "paid"
    assert refetched.paid_at == paid_at
    assert refetched.invoice_number == billing.invoice_number
    assert refetched.amount == billing.amount
    assert refetched.items == billing.items


async def test_paid_billing_cannot_revert(store):
    billing = await billing_service.create(store, {"patientId": "p1", "amount": 100})
    await billing_service.mark_paid(store, billing.id)

    with pytest.raises(ValidationError):
        await billing_service.update(store, billing.id, {"status": "pending"})


async def test_invoice_number_format(store):
    billing = await billing_service.create(store, {"patientId": "p1", "amount": 100})
    year = datetime.now(timezone.utc).year
    assert re.fullmatch(rf"INV-{year}-\d{{4}}", billing.invoice_number)


async def test_invoice_number_cannot_be_supplied(store):
    with pytest.raises(ValidationError):
        await billing_service.create(
            store, {"patientId": "p1", "amount": 100, "invoiceNumber": "INV-1999-0001"}
        )


async def test_invoice_totals(store):
    billing = await billing_service.create(
        store,
        {
            "patientId": "p1",
            "amount": 1200,
            "items": [
                {"description": "Room", "amount": 500, "quantity": 2},
                {"description": "Lab", "amount": 200},
            ],
        },
    )
    invoice = await billing_service.get_invoice(store, billing.id)
    assert invoice.totals.subtotal == 1200
    assert invoice.totals.tax == 216
    assert invoice.totals.total == 1416


async def test_missing_document_is_not_found(store):
    with pytest.raises(NotFoundError):
        await patient_service.get(store, "x404")


async def test_update_missing_document_is_not_found(store):
    with pytest.raises(NotFoundError):
        await patient_service.update(store, "x404", {"contact": "1"})


async def test_patient_registration_is_logged(store, make_user):
    staff = await make_user("staff")
    patient = await patient_service.create(store, RAJ, staff)

    page = await activity_service.list(store, {"userId": staff.id})

    assert page.total == 1
    entry = page.data[0]
    assert entry.type == "patient_registered"
    assert entry.related_id == patient.id
    assert "Raj Patel" in entry.description


async def test_activity_failure_does_not_fail_primary_write(store):
    patient = await patient_service.create(ActivityOutageStore(store), RAJ)

    assert (await patient_service.get(store, patient.id)).name == "Raj Patel"
    assert (await activity_service.list(store)).total == 0


async def test_admission_defaults_and_discharge(store):
    admission = await admission_service.create(
        store, {"patientId": "p1", "admissionType": "IPD", "doctorId": "d1", "roomNumber": "12"}
    )
    assert admission.status == "active"
    assert admission.admission_date is not None
    assert admission.discharge_date is None

    discharged = await admission_service.discharge(store, admission.id)
    assert discharged.status == "discharged"
    assert discharged.discharge_date is not None
    assert discharged.room_number == "12"

    with pytest.raises(ValidationError):
        await admission_service.discharge(store, admission.id)
    with pytest.raises(ValidationError):
        await admission_service.update(store, admission.id, {"status": "active"})


async def test_treatment_logs_are_append_only(store):
    log = await treatment_log_service.create(
        store, {"patientId": "p1", "notes": "BP stable", "vitals": {"bp": "120/80"}}
    )
    with pytest.raises(ValidationError):
        await treatment_log_service.update(store, log.id, {"notes": "edited"})


async def test_inventory_reorder_filter_and_stock(store):
    low = await inventory_service.create(
        store, {"name": "Gauze", "type": "supply", "quantity": 5, "unit": "pack", "reorderLevel": 10}
    )
    await inventory_service.create(
        store, {"name": "Saline", "type": "medicine", "quantity": 50, "unit": "bottle", "reorderLevel": 10}
    )
    edge = await inventory_service.create(
        store, {"name": "Gloves", "type": "supply", "quantity": 10, "unit": "box", "reorderLevel": 10}
    )

    page = await inventory_service.list(store, {"reorderNeeded": True})
    assert {item.id for item in page.data} == {low.id, edge.id}

    restocked = await inventory_service.adjust_stock(store, low.id, 20)
    assert restocked.quantity == 25
    assert restocked.updated_at >= low.updated_at

    with pytest.raises(ValidationError):
        await inventory_service.adjust_stock(store, edge.id, -11)
    assert (await inventory_service.get(store, edge.id)).quantity == 10


async def test_create_stores_schema_defaults(store):
    item = await inventory_service.create(
        store, {"name": "Gauze", "type": "supply", "unit": "pack"}
    )

    stored = await store.get(Resource.INVENTORY.value, item.id)
    assert stored["quantity"] == 0
    assert stored["reorderLevel"] == 10
    assert item.reorder_needed

    page = await inventory_service.list(store, {"reorderNeeded": True})
    assert [found.id for found in page.data] == [item.id]


async def test_update_only_touches_supplied_fields(store):
    item = await inventory_service.create(
        store, {"name": "Gauze", "type": "supply", "unit": "pack", "reorderLevel": 3}
    )

    await inventory_service.update(store, item.id, {"price": 12.5})

    stored = await store.get(Resource.INVENTORY.value, item.id)
    assert stored["reorderLevel"] == 3
    assert stored["price"] == 12.5


async def test_nested_defaults_are_stored(store):
    billing = await billing_service.create(
        store,
        {"patientId": "p1", "amount": 300, "items": [{"description": "X-ray", "amount": 300}]},
    )

    stored = await store.get(Resource.BILLINGS.value, billing.id)
    assert stored["items"] == [{"description": "X-ray", "amount": 300, "quantity": 1}]


async def test_commission_defaults_and_payout(store, make_user):
    affiliate = await make_user("affiliate")

    doctor_commission = await affiliate_tracking_service.create(
        store, {"userId": "u1", "userType": "doctor", "month": 3, "year": 2024}, affiliate
    )
    hospital_commission = await affiliate_tracking_service.create(
        store, {"userId": "u2", "userType": "hospital", "month": 4, "year": 2024}, affiliate
    )
    assert doctor_commission.affiliate_id == affiliate.id
    assert doctor_commission.amount == 700
    assert hospital_commission.amount == 1200
    assert doctor_commission.status == "pending"

    paid = await affiliate_tracking_service.mark_paid(store, doctor_commission.id, affiliate)
    assert paid.status == "paid"
    assert paid.paid_at is not None

    stats = await affiliate_tracking_service.commission_stats(store, affiliate.id)
    assert stats.total == 1900
    assert stats.paid == 700
    assert stats.pending == 1200
    assert stats.monthly == {"2024-03": 700, "2024-04": 1200}


async def test_account_onboarding_and_payment(store, make_user):
    affiliate = await make_user("affiliate")
    account = await affiliate_account_service.create(
        store,
        {
            "name": "City Hospital",
            "email": "admin@cityhospital.org",
            "contact": "555-0199",
            "accountType": "hospital",
            "hospitalName": "City General",
            "bedCount": 120,
        },
        affiliate,
    )
    assert account.status == "pending"
    assert account.plan_amount == 6000
    assert account.affiliate_id == affiliate.id

    activated = await affiliate_account_service.mark_paid(store, account.id, affiliate)
    assert activated.status == "active"
    assert activated.last_payment is not None

    payments = await affiliate_account_service.list_payments(store, account.id)
    assert payments.total == 1
    payment = payments.data[0]
    assert payment.amount == 6000
    assert payment.account_name == "City General"
    assert payment.created_by == affiliate.id


async def test_trial_account_gets_plan_window(store, make_user):
    affiliate = await make_user("affiliate")
    account = await affiliate_account_service.create(
        store,
        {
            "name": "Dr. Mehta",
            "email": "mehta@clinic.org",
            "contact": "555-0101",
            "accountType": "doctor",
            "trial": True,
        },
        affiliate,
    )
    assert account.status == "trial"
    assert account.plan_amount == 3500
    assert (account.plan_end - account.plan_start).days == 7
