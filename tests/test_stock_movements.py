from app.showroom.core.constants import VehicleCategory
from tests.showroom_helpers import (
    PARTNER_CNIC,
    auth_headers,
    create_admin,
    create_showroom,
    create_vehicle,
    sale_payload,
)


def _stock_in(client, headers, suffix, vehicle_type="Bike"):
    response = client.post(
        "/vehicles",
        json={
            "vehicleType": vehicle_type,
            "brand": "Honda",
            "model": "CG 125",
            "price": "350000",
            "color": "Black",
            "engineNumber": f"ENG-{suffix}",
            "chassisNumber": f"CHS-{suffix}",
            "partner": "Kamran",
            "partnerCNIC": PARTNER_CNIC,
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["vehicle"]


def _sale_for(vehicle: dict) -> dict:
    return {
        "vehicleType": vehicle["vehicleType"],
        "vehicleId": vehicle["id"],
        "paymentType": "Cash",
        "customerName": "Ali",
        "customerCNIC": "42101-1234567-1",
    }


def test_history_shows_both_movements(client, db_session):
    showroom = create_showroom(db_session, "t1")
    headers = auth_headers(client, showroom)
    vehicle = _stock_in(client, headers, "a1")
    sold = client.post("/sales", json=_sale_for(vehicle), headers=headers)
    assert sold.status_code == 201

    rows = client.get("/stock-movements", headers=headers).json()["rows"]
    stock_out = client.get("/stock-movements", params={"status": "StockOut"}, headers=headers).json()["rows"]

    assert {row["status"] for row in rows} == {"StockIn", "StockOut"}
    assert all(row["vehicleId"] == vehicle["id"] for row in rows)
    assert len(stock_out) == 1
    assert stock_out[0]["saleId"] == sold.json()["sale"]["id"]
    assert stock_out[0]["customerCNIC"] == "42101-1234567-1"
    assert stock_out[0]["partnerCNIC"] == PARTNER_CNIC


def test_history_is_tenant_scoped(client, db_session):
    admin = create_admin(db_session)
    t1 = create_showroom(db_session, "t1")
    t2 = create_showroom(db_session, "t2")
    _stock_in(client, auth_headers(client, t1), "a1")
    _stock_in(client, auth_headers(client, t2), "b1", vehicle_type="Car")
    admin_headers = auth_headers(client, admin)

    own = client.get("/stock-movements", headers=auth_headers(client, t1)).json()["rows"]
    everything = client.get("/stock-movements", headers=admin_headers).json()["rows"]
    cars = client.get("/stock-movements", params={"vehicleType": "car"}, headers=admin_headers).json()["rows"]
    denied = client.get("/stock-movements", params={"showroomId": str(t2.id)}, headers=auth_headers(client, t1))

    assert [row["showroomId"] for row in own] == [str(t1.id)]
    assert len(everything) == 2
    assert [row["vehicleType"] for row in cars] == [VehicleCategory.CAR.value]
    assert denied.status_code == 403
    assert denied.json()["code"] == "CROSS_TENANT_ACCESS_DENIED"


def test_history_rejects_unknown_filters(client, db_session):
    showroom = create_showroom(db_session, "t1")
    headers = auth_headers(client, showroom)

    bad_type = client.get("/stock-movements", params={"vehicleType": "Boat"}, headers=headers)
    bad_status = client.get("/stock-movements", params={"status": "Sold"}, headers=headers)

    assert bad_type.json()["code"] == "INVALID_VEHICLE_TYPE"
    assert bad_status.status_code == 400


def test_directly_seeded_vehicles_have_no_history(client, db_session):
    showroom = create_showroom(db_session, "t1")
    create_vehicle(db_session, showroom)
    vehicle = create_vehicle(db_session, showroom)
    headers = auth_headers(client, showroom)
    client.post("/sales", json=sale_payload(vehicle), headers=headers)

    rows = client.get("/stock-movements", headers=headers).json()["rows"]

    assert [row["status"] for row in rows] == ["StockOut"]
