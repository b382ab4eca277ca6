import uuid

import pytest

from tests.showroom_helpers import (
    auth_headers,
    create_showroom,
    create_vehicle,
    sale_count,
    sale_payload,
    vehicle_status,
)


@pytest.mark.parametrize(
    "cnic",
    ["12345123456", "1234-1234567-1", "42101-1234567", "42101-1234567-12", "abcde-fghijkl-m", ""],
)
def test_bad_customer_cnic_is_rejected_before_any_write(client, db_session, cnic):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom)
    headers = auth_headers(client, showroom)

    response = client.post("/sales", json=sale_payload(vehicle, customerCNIC=cnic), headers=headers)

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_CNIC"
    assert vehicle_status(db_session, vehicle) == "StockIn"
    assert sale_count(db_session) == 0


def test_unknown_vehicle_type(client, db_session):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom)
    headers = auth_headers(client, showroom)

    response = client.post("/sales", json=sale_payload(vehicle, vehicleType="Truck"), headers=headers)

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "INVALID_VEHICLE_TYPE"
    assert "ElectricBike" in body["details"]["available_types"]


def test_blank_customer_name(client, db_session):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom)
    headers = auth_headers(client, showroom)

    response = client.post("/sales", json=sale_payload(vehicle, customerName="   "), headers=headers)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert response.json()["details"]["field"] == "customerName"


@pytest.mark.parametrize("payment_type", ["Crypto", None])
def test_payment_type_outside_closed_set(client, db_session, payment_type):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom)
    headers = auth_headers(client, showroom)
    payload = sale_payload(vehicle, paymentType=payment_type)

    response = client.post("/sales", json=payload, headers=headers)

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert any(error["field"] == "paymentType" for error in body["details"]["errors"])


def test_missing_required_fields(client, db_session):
    showroom = create_showroom(db_session, "t1")
    headers = auth_headers(client, showroom)

    response = client.post("/sales", json={"paymentType": "Cash"}, headers=headers)

    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["details"]["errors"]}
    assert {"vehicleType", "vehicleId", "customerName", "customerCNIC"} <= fields


@pytest.mark.parametrize(
    "terms",
    [
        {"advanceAmount": 0, "months": 10},
        {"advanceAmount": -5, "months": 10},
        {"advanceAmount": 600001, "months": 10},
        {"advanceAmount": 100000, "months": 0},
        {"advanceAmount": 100000, "months": 61},
        {"months": 10},
        {"advanceAmount": 100000},
    ],
)
def test_invalid_installment_terms(client, db_session, terms):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom, price="600000")
    headers = auth_headers(client, showroom)

    response = client.post("/sales", json=sale_payload(vehicle, paymentType="Installment", **terms), headers=headers)

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_PAYMENT_TERMS"
    assert vehicle_status(db_session, vehicle) == "StockIn"


def test_advance_equal_to_price_is_allowed(client, db_session):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom, price="600000")
    headers = auth_headers(client, showroom)

    response = client.post(
        "/sales",
        json=sale_payload(vehicle, paymentType="Installment", advanceAmount=600000, months=1),
        headers=headers,
    )

    assert response.status_code == 201
    assert response.json()["sale"]["dueAmount"] in ("0", "0.00")


@pytest.mark.parametrize("settings_overrides", [{"SALE_MAX_INSTALLMENT_MONTHS": None}])
def test_months_unbounded_when_cap_unset(client, db_session):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom, price="600000")
    headers = auth_headers(client, showroom)

    response = client.post(
        "/sales",
        json=sale_payload(vehicle, paymentType="Installment", advanceAmount=120000, months=120),
        headers=headers,
    )

    assert response.status_code == 201, response.text
    assert response.json()["sale"]["months"] == 120


@pytest.mark.parametrize("vehicle_id", [str(uuid.uuid4()), "not-a-uuid"])
def test_vehicle_not_found(client, db_session, vehicle_id):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom)
    headers = auth_headers(client, showroom)

    response = client.post("/sales", json=sale_payload(vehicle, vehicleId=vehicle_id), headers=headers)

    assert response.status_code == 404
    assert response.json()["code"] == "VEHICLE_NOT_FOUND"


def test_vehicle_looked_up_in_named_category_only(client, db_session):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom)
    headers = auth_headers(client, showroom)

    response = client.post("/sales", json=sale_payload(vehicle, vehicleType="Car"), headers=headers)

    assert response.status_code == 404
    assert vehicle_status(db_session, vehicle) == "StockIn"


@pytest.mark.parametrize("advance", ["2.675", "0.001"])
def test_advance_beyond_cent_precision_is_rejected(client, db_session, advance):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom, price="600000")
    headers = auth_headers(client, showroom)

    payload = sale_payload(vehicle, paymentType="Installment", advanceAmount=advance, months=7)
    response = client.post("/sales", json=payload, headers=headers)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert vehicle_status(db_session, vehicle) == "StockIn"
    assert sale_count(db_session) == 0


def test_overlong_customer_name_is_rejected(client, db_session):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom)
    headers = auth_headers(client, showroom)

    response = client.post("/sales", json=sale_payload(vehicle, customerName="A" * 256), headers=headers)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert vehicle_status(db_session, vehicle) == "StockIn"
    assert sale_count(db_session) == 0
