from sqlalchemy.exc import OperationalError, SQLAlchemyError

from app.showroom.repos.audit import AuditTrailRepository
from app.showroom.repos.sales import SaleRepository
from tests.showroom_helpers import (
    audit_events,
    auth_headers,
    create_showroom,
    create_vehicle,
    sale_count,
    sale_payload,
    vehicle_status,
)


def test_audit_failure_rolls_back_sale_and_claim(client, db_session, monkeypatch):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom)
    headers = auth_headers(client, showroom)

    def failing_append(self, event):
        raise SQLAlchemyError("audit store unavailable")

    monkeypatch.setattr(AuditTrailRepository, "append", failing_append)
    response = client.post("/sales", json=sale_payload(vehicle), headers=headers)

    assert response.status_code == 500
    assert response.json()["code"] == "STORAGE_FAILURE"
    assert vehicle_status(db_session, vehicle) == "StockIn"
    assert sale_count(db_session) == 0
    assert audit_events(db_session, status="StockOut") == []


def test_ledger_failure_leaves_vehicle_sellable(client, db_session, monkeypatch):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom)
    headers = auth_headers(client, showroom)
    original_append = SaleRepository.append

    def failing_append(self, sale):
        raise SQLAlchemyError("ledger unavailable")

    monkeypatch.setattr(SaleRepository, "append", failing_append)
    failed = client.post("/sales", json=sale_payload(vehicle), headers=headers)
    monkeypatch.setattr(SaleRepository, "append", original_append)
    retried = client.post("/sales", json=sale_payload(vehicle), headers=headers)

    assert failed.status_code == 500
    assert retried.status_code == 201
    assert sale_count(db_session, vehicle) == 1


def test_lock_timeout_surfaces_as_conflict(client, db_session, monkeypatch):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom)
    headers = auth_headers(client, showroom)

    def locked_append(self, sale):
        raise OperationalError("INSERT INTO sales", {}, Exception("database is locked"))

    monkeypatch.setattr(SaleRepository, "append", locked_append)
    response = client.post("/sales", json=sale_payload(vehicle), headers=headers)

    assert response.status_code == 409
    assert response.json()["code"] == "LOCK_TIMEOUT"
    assert vehicle_status(db_session, vehicle) == "StockIn"
