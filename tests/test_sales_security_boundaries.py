from tests.showroom_helpers import (
    auth_headers,
    create_admin,
    create_showroom,
    create_vehicle,
    sale_count,
    sale_payload,
    vehicle_status,
)


def test_sale_requires_authentication(client, db_session):
    showroom = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, showroom)

    response = client.post("/sales", json=sale_payload(vehicle))

    assert response.status_code == 401
    assert sale_count(db_session) == 0


def test_cross_tenant_vehicle_is_forbidden(client, db_session):
    t1 = create_showroom(db_session, "t1")
    t2 = create_showroom(db_session, "t2")
    vehicle = create_vehicle(db_session, t2)
    headers = auth_headers(client, t1)

    for payment in (
        {"paymentType": "Cash"},
        {"paymentType": "Installment", "advanceAmount": 1000, "months": 5},
    ):
        response = client.post("/sales", json=sale_payload(vehicle, **payment), headers=headers)
        assert response.status_code == 403
        assert response.json()["code"] == "SHOWROOM_SCOPE_MISMATCH"

    assert sale_count(db_session) == 0
    assert vehicle_status(db_session, vehicle) == "StockIn"


def test_showroom_cannot_name_another_showroom(client, db_session):
    t1 = create_showroom(db_session, "t1")
    t2 = create_showroom(db_session, "t2")
    vehicle = create_vehicle(db_session, t1)
    headers = auth_headers(client, t1)

    response = client.post("/sales", json=sale_payload(vehicle, showroomId=str(t2.id)), headers=headers)

    assert response.status_code == 403
    assert response.json()["code"] == "CROSS_TENANT_ACCESS_DENIED"
    assert vehicle_status(db_session, vehicle) == "StockIn"


def test_showroom_may_name_itself(client, db_session):
    t1 = create_showroom(db_session, "t1")
    vehicle = create_vehicle(db_session, t1)
    headers = auth_headers(client, t1)

    response = client.post("/sales", json=sale_payload(vehicle, showroomId=str(t1.id)), headers=headers)

    assert response.status_code == 201


def test_admin_showroom_id_must_match_vehicle_owner(client, db_session):
    admin = create_admin(db_session)
    t1 = create_showroom(db_session, "t1")
    t2 = create_showroom(db_session, "t2")
    vehicle = create_vehicle(db_session, t2)
    headers = auth_headers(client, admin)

    response = client.post("/sales", json=sale_payload(vehicle, showroomId=str(t1.id)), headers=headers)

    assert response.status_code == 403
    assert response.json()["code"] == "SHOWROOM_SCOPE_MISMATCH"
    assert vehicle_status(db_session, vehicle) == "StockIn"


def test_sales_list_is_tenant_filtered(client, db_session):
    t1 = create_showroom(db_session, "t1")
    t2 = create_showroom(db_session, "t2")
    v1 = create_vehicle(db_session, t1)
    v2 = create_vehicle(db_session, t2)
    t1_headers = auth_headers(client, t1)
    t2_headers = auth_headers(client, t2)
    assert client.post("/sales", json=sale_payload(v1), headers=t1_headers).status_code == 201
    assert client.post("/sales", json=sale_payload(v2), headers=t2_headers).status_code == 201

    response = client.get("/sales", headers=t1_headers)

    assert response.status_code == 200
    rows = response.json()["rows"]
    assert [row["showroomId"] for row in rows] == [str(t1.id)]

    forbidden = client.get("/sales", params={"showroomId": str(t2.id)}, headers=t1_headers)
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == "CROSS_TENANT_ACCESS_DENIED"
