from datetime import datetime, timezone

RAJ = {"name": "Raj Patel", "age": 42, "gender": "M", "contact": "9990001111"}


async def test_root_and_health(client):
    assert (await client.get("/")).json()["status"] == "healthy"

    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["store"] == "connected"


async def test_patient_lifecycle(client, login):
    staff, headers = await login("staff")

    created = await client.post("/api/patients", json=RAJ, headers=headers)
    assert created.status_code == 201
    patient = created.json()
    assert patient["id"]
    assert patient["createdAt"]
    assert patient["createdById"] == staff.id
    assert {k: patient[k] for k in RAJ} == RAJ

    fetched = await client.get(f"/api/patients/{patient['id']}", headers=headers)
    assert fetched.json()["name"] == "Raj Patel"

    updated = await client.patch(
        f"/api/patients/{patient['id']}", json={"bloodGroup": "B+"}, headers=headers
    )
    assert updated.status_code == 200
    assert updated.json()["bloodGroup"] == "B+"
    assert updated.json()["contact"] == RAJ["contact"]


async def test_list_envelope(client, login):
    _, headers = await login("doctor")
    for i in range(3):
        await client.post("/api/patients", json={**RAJ, "name": f"Patient {i}"}, headers=headers)

    response = await client.get("/api/patients", params={"page": 2, "limit": 2}, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert body["page"] == 2
    assert body["limit"] == 2
    assert body["totalPages"] == 2
    assert len(body["data"]) == 1


async def test_cursor_endpoint_walks_all_pages(client, login):
    _, headers = await login("doctor")
    for i in range(5):
        await client.post("/api/patients", json={**RAJ, "name": f"Patient {i}"}, headers=headers)

    seen, cursor = [], None
    while True:
        params = {"limit": 2, **({"cursor": cursor} if cursor else {})}
        body = (await client.get("/api/patients/cursor", params=params, headers=headers)).json()
        if not body["data"]:
            assert body["cursor"] is None
            break
        seen.extend(p["id"] for p in body["data"])
        cursor = body["cursor"]

    assert len(seen) == len(set(seen)) == 5


async def test_bad_cursor_is_a_query_error(client, login):
    _, headers = await login("doctor")
    response = await client.get(
        "/api/patients/cursor", params={"cursor": "bm90LWpzb24="}, headers=headers
    )
    assert response.status_code == 400
    assert response.json()["type"] == "QueryError"


async def test_not_found_envelope(client, login):
    _, headers = await login("doctor")
    response = await client.get("/api/patients/x404", headers=headers)
    assert response.status_code == 404
    assert response.json() == {
        "message": "Patient x404 not found",
        "type": "NotFoundError",
        "status": 404,
    }


async def test_unknown_fields_are_rejected(client, login):
    _, headers = await login("staff")
    response = await client.post(
        "/api/patients", json={**RAJ, "id": "chosen-by-client"}, headers=headers
    )
    assert response.status_code == 422
    assert response.json()["type"] == "ValidationError"


async def test_admission_filters_and_discharge(client, login):
    _, headers = await login("nurse")
    for patient_id, admission_type in [("p1", "OPD"), ("p1", "IPD"), ("p2", "IPD")]:
        response = await client.post(
            "/api/admissions",
            json={"patientId": patient_id, "admissionType": admission_type, "doctorId": "d1"},
            headers=headers,
        )
        assert response.status_code == 201

    listed = await client.get(
        "/api/admissions", params={"patientId": "p1", "admissionType": "IPD"}, headers=headers
    )
    body = listed.json()
    assert body["total"] == 1
    admission = body["data"][0]
    assert admission["status"] == "active"

    discharged = await client.patch(
        f"/api/admissions/{admission['id']}/discharge", headers=headers
    )
    assert discharged.status_code == 200
    assert discharged.json()["status"] == "discharged"
    assert discharged.json()["dischargeDate"]

    again = await client.patch(f"/api/admissions/{admission['id']}/discharge", headers=headers)
    assert again.status_code == 422


async def test_billing_payment_and_invoice(client, login):
    _, headers = await login("staff")
    created = await client.post(
        "/api/billings",
        json={
            "patientId": "p1",
            "amount": 1000,
            "items": [{"description": "Consultation", "amount": 1000}],
        },
        headers=headers,
    )
    billing = created.json()
    assert billing["invoiceNumber"].startswith(f"INV-{datetime.now(timezone.utc).year}-")
    assert billing["status"] == "pending"

    paid = await client.patch(
        f"/api/billings/{billing['id']}/status", json={"status": "paid"}, headers=headers
    )
    assert paid.status_code == 200
    assert paid.json()["status"] == "paid"
    assert paid.json()["paidAt"]
    assert paid.json()["invoiceNumber"] == billing["invoiceNumber"]

    reopened = await client.patch(
        f"/api/billings/{billing['id']}", json={"status": "pending"}, headers=headers
    )
    assert reopened.status_code == 422

    invoice = (await client.get(f"/api/billings/{billing['id']}/invoice", headers=headers)).json()
    assert invoice["totals"] == {
        "subtotal": 1000,
        "taxRate": 0.18,
        "tax": 180,
        "discount": 0,
        "total": 1180,
    }


async def test_inventory_stock_endpoint(client, login):
    _, headers = await login("nurse")
    item = (
        await client.post(
            "/api/inventory",
            json={"name": "Gauze", "type": "supply", "quantity": 3, "unit": "pack", "reorderLevel": 5},
            headers=headers,
        )
    ).json()

    low = await client.get("/api/inventory", params={"reorderNeeded": "true"}, headers=headers)
    assert [i["id"] for i in low.json()["data"]] == [item["id"]]

    response = await client.patch(
        f"/api/inventory/{item['id']}/stock", json={"delta": -4}, headers=headers
    )
    assert response.status_code == 422

    response = await client.patch(
        f"/api/inventory/{item['id']}/stock", json={"delta": 10}, headers=headers
    )
    assert response.json()["quantity"] == 13


async def test_current_user(client, login):
    doctor, headers = await login("doctor")
    response = await client.get("/api/users/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["id"] == doctor.id
    assert response.json()["role"] == "doctor"


async def test_activity_feed(client, login):
    _, headers = await login("staff")
    await client.post("/api/patients", json=RAJ, headers=headers)

    response = await client.get(
        "/api/activity-logs", params={"type": "patient_registered"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert response.json()["data"][0]["title"] == "New Patient Registered"


async def test_clinic_dashboard(client, login):
    _, headers = await login("doctor")
    patient = (await client.post("/api/patients", json=RAJ, headers=headers)).json()
    await client.post(
        "/api/admissions",
        json={"patientId": patient["id"], "admissionType": "OPD", "doctorId": "d1"},
        headers=headers,
    )
    await client.post(
        "/api/billings", json={"patientId": patient["id"], "amount": 500}, headers=headers
    )
    await client.post(
        "/api/treatment-logs",
        json={"patientId": patient["id"], "notes": "Follow-up in a week"},
        headers=headers,
    )

    stats = (await client.get("/api/dashboard", headers=headers)).json()

    assert stats["role"] == "doctor"
    assert stats["windowDays"] == 30
    assert stats["totalPatients"] == 1
    assert stats["admissions"] == {"total": 1, "opd": 1, "ipd": 0}
    assert stats["revenue"] == 500
    assert stats["appointments"] == 1
    assert "commission" not in stats


async def test_affiliate_dashboard_and_accounts(client, login):
    affiliate, headers = await login("affiliate")
    year, month = datetime.now(timezone.utc).year, datetime.now(timezone.utc).month

    account = await client.post(
        "/api/affiliate-accounts",
        json={
            "name": "Dr. Mehta",
            "email": "mehta@clinic.org",
            "contact": "555-0101",
            "accountType": "doctor",
        },
        headers=headers,
    )
    assert account.status_code == 201
    account_id = account.json()["id"]

    paid = await client.patch(f"/api/affiliate-accounts/{account_id}/mark-paid", headers=headers)
    assert paid.json()["status"] == "active"

    payments = await client.get(f"/api/affiliate-accounts/{account_id}/payments", headers=headers)
    assert payments.json()["total"] == 1
    assert payments.json()["data"][0]["amount"] == 3500

    tracking = await client.post(
        "/api/affiliate-tracking",
        json={"userId": account_id, "userType": "doctor", "month": month, "year": year},
        headers=headers,
    )
    assert tracking.json()["amount"] == 700

    stats = (await client.get("/api/dashboard", headers=headers)).json()
    assert stats["accounts"] == {"total": 1, "doctors": 1, "hospitals": 0}
    assert stats["commission"]["total"] == 700
    assert stats["monthlyRevenue"] == {f"{year:04d}-{month:02d}": 700}
    assert "totalPatients" not in stats

    summary = (
        await client.get(f"/api/affiliate-tracking/{affiliate.id}/stats", headers=headers)
    ).json()
    assert summary["pending"] == 700


async def test_dashboard_omits_collections_the_role_cannot_read(client, login):
    _, staff_headers = await login("staff")
    await client.post(
        "/api/billings", json={"patientId": "p1", "amount": 500}, headers=staff_headers
    )
    _, headers = await login("hospital")

    assert (await client.get("/api/billings", headers=headers)).status_code == 403

    response = await client.get("/api/dashboard", headers=headers)
    assert response.status_code == 200
    stats = response.json()
    assert stats["role"] == "hospital"
    for section in ("revenue", "totalPatients", "admissions", "appointments"):
        assert section not in stats


async def test_staff_dashboard_skips_treatment_logs(client, login):
    _, headers = await login("staff")
    await client.post(
        "/api/billings", json={"patientId": "p1", "amount": 250}, headers=headers
    )

    stats = (await client.get("/api/dashboard", headers=headers)).json()

    assert stats["revenue"] == 250
    assert stats["totalPatients"] == 0
    assert "appointments" not in stats


async def test_inventory_defaults_match_reorder_filter(client, login):
    _, headers = await login("nurse")
    item = (
        await client.post(
            "/api/inventory",
            json={"name": "Gauze", "type": "supply", "unit": "pack"},
            headers=headers,
        )
    ).json()
    assert (item["quantity"], item["reorderLevel"]) == (0, 10)

    low = await client.get("/api/inventory", params={"reorderNeeded": "true"}, headers=headers)
    assert [i["id"] for i in low.json()["data"]] == [item["id"]]
