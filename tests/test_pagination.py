from datetime import datetime, timedelta, timezone

import pytest

from core.config import settings
from models.enums import Resource
from services import pagination
from services.admission_service import admission_service
from services.billing_service import billing_service
from services.query_builder import build_query
from utils.exceptions import QueryError
from utils.time_utils import to_iso

BASE_TIME = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


async def seed_patients(store, count, same_timestamp_every=1):
    """Insert patients directly, sharing createdAt within groups to force ties"""
    ids = []
    for i in range(count):
        created = BASE_TIME + timedelta(minutes=i // same_timestamp_every)
        snapshot = await store.add(
            "patients",
            {
                "name": f"Patient {i}",
                "age": 30,
                "gender": "F",
                "contact": "555-0100",
                "createdAt": to_iso(created),
            },
        )
        ids.append(snapshot["id"])
    return ids


async def collect_all(store, query, page_size):
    seen, cursor = [], None
    while True:
        documents, cursor = await pagination.fetch_page(store, query, cursor, page_size)
        if not documents:
            assert cursor is None
            return seen
        assert len(documents) <= page_size
        seen.extend(documents)


@pytest.mark.parametrize("page_size", [1, 3, 4, 10, 25])
async def test_pages_cover_every_document_once(store, page_size):
    ids = await seed_patients(store, 10, same_timestamp_every=3)

    seen = await collect_all(store, build_query(Resource.PATIENTS), page_size)

    assert sorted(d["id"] for d in seen) == sorted(ids)
    assert len(seen) == len(ids)
    keys = [(d["createdAt"], d["id"]) for d in seen]
    assert keys == sorted(keys, reverse=True)


async def test_empty_collection_returns_no_cursor(store):
    documents, cursor = await pagination.fetch_page(store, build_query(Resource.PATIENTS))
    assert documents == []
    assert cursor is None


async def test_documents_without_sort_field_are_not_listed(store):
    await seed_patients(store, 2)
    await store.add("patients", {"name": "No timestamp", "age": 1, "gender": "M", "contact": "x"})

    documents, _ = await pagination.fetch_page(store, build_query(Resource.PATIENTS))
    assert len(documents) == 2


async def test_default_page_size(store):
    await seed_patients(store, settings.DEFAULT_PAGE_SIZE + 2)
    documents, cursor = await pagination.fetch_page(store, build_query(Resource.PATIENTS))
    assert len(documents) == settings.DEFAULT_PAGE_SIZE
    assert cursor is not None


def test_page_size_must_be_positive():
    with pytest.raises(QueryError):
        pagination.resolve_page_size(0)


def test_page_size_is_capped():
    assert pagination.resolve_page_size(settings.MAX_PAGE_SIZE + 50) == settings.MAX_PAGE_SIZE


async def test_malformed_cursor_is_rejected(store):
    with pytest.raises(QueryError):
        await pagination.fetch_page(store, build_query(Resource.PATIENTS), "not-a-cursor!")


async def test_cursor_from_another_collection_is_rejected(store):
    await seed_patients(store, 2)
    _, cursor = await pagination.fetch_page(store, build_query(Resource.PATIENTS), page_size=1)

    with pytest.raises(QueryError):
        await pagination.fetch_page(store, build_query(Resource.BILLINGS), cursor)


async def test_iterate_stops_on_empty_page(store):
    ids = await seed_patients(store, 7)
    pages = [page async for page in pagination.iterate(store, build_query(Resource.PATIENTS), 3)]
    assert [len(p) for p in pages] == [3, 3, 1]
    assert {d["id"] for page in pages for d in page} == set(ids)


async def test_admissions_filtered_by_patient_and_status(store):
    """Only p1's active admissions, newest admission date first"""
    rows = [
        ("p1", "OPD", 1),
        ("p1", "IPD", 5),
        ("p2", "OPD", 3),
        ("p1", "OPD", 2),
        ("p2", "IPD", 4),
    ]
    created = {}
    for patient_id, admission_type, day in rows:
        admission = await admission_service.create(
            store,
            {
                "patientId": patient_id,
                "admissionType": admission_type,
                "doctorId": "d1",
                "admissionDate": BASE_TIME + timedelta(days=day),
            },
        )
        created[day] = admission
    # Discharge one of p1's admissions so the status filter matters
    await admission_service.discharge(store, created[2].id)

    page = await admission_service.fetch_page(
        store, {"patientId": "p1", "status": "active"}, page_size=10
    )

    assert [a.id for a in page.data] == [created[5].id, created[1].id]
    for admission in page.data:
        assert admission.patient_id == "p1"
        assert admission.status == "active"
    dates = [a.admission_date for a in page.data]
    assert dates == sorted(dates, reverse=True)


async def test_every_returned_document_matches_all_filters(store):
    for i in range(6):
        billing = await billing_service.create(
            store, {"patientId": f"p{i % 2}", "amount": 100 + i}
        )
        if i % 3 == 0:
            await billing_service.mark_paid(store, billing.id)

    filters = {"patientId": "p0", "status": "pending"}
    everything = await billing_service.find_all(store)
    expected = {
        b["id"] for b in everything if b["patientId"] == "p0" and b["status"] == "pending"
    }

    matched = await billing_service.find_all(store, filters)

    assert {b["id"] for b in matched} == expected
    assert all(b["patientId"] == "p0" and b["status"] == "pending" for b in matched)
