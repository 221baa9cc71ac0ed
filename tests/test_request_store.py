"""Request store persistence semantics."""
import sqlite3

import pytest

from service_automation.database import init_database
from service_automation.errors import PersistenceError
from service_automation.models import STATUS_OPTIONS_SENT, STATUS_WAITING_CUSTOMER
from service_automation.services.request_store import CREATED, UPDATED, RequestStore


@pytest.fixture
def request_store(db_path) -> RequestStore:
    init_database(db_path)
    return RequestStore(db_path)


def _save(store, si_number="SI12345678", email="jane@example.com", **fields):
    return store.upsert_request(
        si_number=si_number, customer_email=email, sku="B12345",
        assigned_user_email="staff@example.com", **fields,
    )


def test_create_then_update_keeps_identity(request_store):
    first, outcome = _save(request_store, customer_phone="0400 000 001")
    assert outcome == CREATED
    assert first.status == STATUS_WAITING_CUSTOMER

    second, outcome = _save(request_store, customer_phone="0400 000 002")
    assert outcome == UPDATED
    assert second.id == first.id
    assert second.created_at == first.created_at
    assert second.customer_phone == "0400 000 002"
    assert len(request_store.list_requests()) == 1


def test_resubmission_does_not_reset_status(request_store):
    request, _ = _save(request_store)
    request_store.update_status(request.id, STATUS_OPTIONS_SENT)

    again, _ = _save(request_store)
    assert again.status == STATUS_OPTIONS_SENT


def test_pending_lookup_takes_most_recent(request_store):
    older, _ = _save(request_store, si_number="SI00000001")
    newer, _ = _save(request_store, si_number="SI00000002")

    found = request_store.find_pending_request_by_email("jane@example.com")
    assert found.id == newer.id

    request_store.update_status(newer.id, STATUS_OPTIONS_SENT)
    assert request_store.find_pending_request_by_email("jane@example.com").id == older.id


def test_pending_lookup_ignores_email_case(request_store):
    _save(request_store)
    assert request_store.find_pending_request_by_email("Jane@Example.com") is not None


def test_pending_lookup_none_when_absent(request_store):
    assert request_store.find_pending_request_by_email("nobody@example.com") is None


def test_append_and_list_responses(request_store):
    request, _ = _save(request_store)
    request_store.append_response(request.id, "SN-1", "Broken", "In Warranty")
    request_store.append_response(request.id, "SN-1", "Still broken", "In Warranty")

    responses = request_store.list_responses(request.id)
    assert [r.problem_description for r in responses] == ["Broken", "Still broken"]
    assert responses[0].received_at is not None


def test_update_status(request_store):
    request, _ = _save(request_store)
    updated = request_store.update_status(request.id, STATUS_OPTIONS_SENT)
    assert updated.status == STATUS_OPTIONS_SENT
    assert request_store.get_request("SI12345678").status == STATUS_OPTIONS_SENT


def test_stats(request_store):
    request, _ = _save(request_store)
    _save(request_store, si_number="SI00000009")
    request_store.update_status(request.id, STATUS_OPTIONS_SENT)
    request_store.append_response(request.id, "SN", "Broken", "Unknown")

    stats = request_store.stats()
    assert stats["total_requests"] == 2
    assert stats["by_status"] == {STATUS_OPTIONS_SENT: 1, STATUS_WAITING_CUSTOMER: 1}
    assert stats["total_responses"] == 1


def test_mirror_receives_saved_records(request_store):
    mirrored = []

    class FakeMirror:
        def mirror(self, record):
            mirrored.append(record)

    request_store.mirror = FakeMirror()
    _save(request_store)

    assert mirrored[0]["si_number"] == "SI12345678"
    assert "id" not in mirrored[0]


def test_database_errors_become_persistence_errors(tmp_path):
    # Tables were never created at this path
    store = RequestStore(str(tmp_path / "empty.db"))
    with pytest.raises(PersistenceError):
        store.get_request("SI12345678")


def test_schema_enforces_unique_order_number(db_path):
    init_database(db_path)
    conn = sqlite3.connect(db_path)
    insert = ("INSERT INTO service_requests (si_number, customer_email, sku, assigned_user_email) "
              "VALUES ('SI1', 'a@b.co', 'X', 's@b.co')")
    conn.execute(insert)
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute(insert)
    conn.close()
