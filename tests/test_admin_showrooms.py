from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from app.showroom.core.constants import VehicleCategory
from app.showroom.db.models import VEHICLE_MODELS, User
from app.showroom.repos.users import UserRepository
from tests.showroom_helpers import (
    PASSWORD,
    auth_headers,
    create_admin,
    create_showroom,
    create_vehicle,
    ident,
    vehicle_status,
)


def _vehicle_total(db_session, showroom_id) -> int:
    db_session.expire_all()
    return sum(
        db_session.execute(select(func.count(model.id)).where(model.showroom_id == showroom_id)).scalar_one()
        for model in VEHICLE_MODELS.values()
    )


def _user_count(db_session, user_id) -> int:
    db_session.expire_all()
    return db_session.execute(select(func.count(User.id)).where(User.id == user_id)).scalar_one()


def test_admin_creates_showroom_user(client, db_session):
    admin = create_admin(db_session)
    headers = auth_headers(client, admin)

    response = client.post(
        "/admin/users",
        json={"username": "city-motors", "password": "Secret12", "role": "showroom", "showroomName": "City Motors"},
        headers=headers,
    )

    assert response.status_code == 201, response.text
    payload = response.json()
    assert payload["username"] == "city-motors"
    assert payload["showroomName"] == "City Motors"
    assert payload["isActive"] is True
    login = client.post("/auth/login", json={"username": "city-motors", "password": "Secret12"})
    assert login.status_code == 200
    assert login.json()["showroom_id"] == payload["id"]


def test_duplicate_username_conflicts(client, db_session):
    admin = create_admin(db_session)
    create_showroom(db_session, "t1")

    response = client.post(
        "/admin/users",
        json={"username": "showroom-t1", "password": "Secret12", "showroomName": "Again"},
        headers=auth_headers(client, admin),
    )

    assert response.status_code == 409
    assert response.json()["code"] == "USERNAME_TAKEN"


def test_showroom_role_requires_showroom_name(client, db_session):
    admin = create_admin(db_session)

    response = client.post(
        "/admin/users",
        json={"username": "nameless", "password": "Secret12", "role": "showroom"},
        headers=auth_headers(client, admin),
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_showroom_cannot_use_admin_endpoints(client, db_session):
    showroom = create_showroom(db_session, "t1")
    headers = auth_headers(client, showroom)

    new_user = {"username": "x-user", "password": "Secret12", "role": "admin"}
    created = client.post("/admin/users", json=new_user, headers=headers)
    listed = client.get("/admin/users", headers=headers)
    deleted = client.delete(f"/admin/users/{showroom.id}", headers=headers)

    for response in (created, listed, deleted):
        assert response.status_code == 403
        assert response.json()["code"] == "PERMISSION_DENIED"


def test_list_users_with_role_filter(client, db_session):
    admin = create_admin(db_session)
    create_showroom(db_session, "t1")
    create_showroom(db_session, "t2")
    headers = auth_headers(client, admin)

    everyone = client.get("/admin/users", headers=headers).json()
    showrooms = client.get("/admin/users", params={"role": "showroom"}, headers=headers).json()
    searched = client.get("/admin/users", params={"search": "t2"}, headers=headers).json()

    assert everyone["total"] == 3
    assert showrooms["total"] == 2
    assert {row["username"] for row in showrooms["rows"]} == {"showroom-t1", "showroom-t2"}
    assert [row["username"] for row in searched["rows"]] == ["showroom-t2"]


def test_delete_showroom_cascades_vehicles(client, db_session):
    admin = create_admin(db_session)
    doomed = create_showroom(db_session, "t1")
    survivor = create_showroom(db_session, "t2")
    for category in VehicleCategory:
        create_vehicle(db_session, doomed, category=category)
    kept = create_vehicle(db_session, survivor)
    doomed_id = ident(doomed)
    headers = auth_headers(client, admin)

    response = client.delete(f"/admin/users/{doomed_id}", headers=headers)

    assert response.status_code == 200, response.text
    payload = response.json()
    assert payload["userId"] == str(doomed_id)
    assert payload["vehiclesDeleted"] == {category.value: 1 for category in VehicleCategory}
    assert _vehicle_total(db_session, doomed_id) == 0
    assert _user_count(db_session, doomed_id) == 0
    assert vehicle_status(db_session, kept) == "StockIn"
    assert client.post("/auth/login", json={"username": "showroom-t1", "password": PASSWORD}).status_code == 401


def test_delete_is_all_or_nothing(client, db_session, monkeypatch):
    admin = create_admin(db_session)
    doomed = create_showroom(db_session, "t1")
    create_vehicle(db_session, doomed)
    create_vehicle(db_session, doomed, category=VehicleCategory.CAR)
    doomed_id = ident(doomed)
    headers = auth_headers(client, admin)

    def failing_delete(self, user):
        raise SQLAlchemyError("user store unavailable")

    monkeypatch.setattr(UserRepository, "delete", failing_delete)
    response = client.delete(f"/admin/users/{doomed_id}", headers=headers)

    assert response.status_code == 500
    assert response.json()["code"] == "STORAGE_FAILURE"
    assert _vehicle_total(db_session, doomed_id) == 2
    assert _user_count(db_session, doomed_id) == 1


def test_admin_accounts_cannot_be_deleted(client, db_session):
    admin = create_admin(db_session)
    other_admin = create_admin(db_session, "second")

    response = client.delete(f"/admin/users/{other_admin.id}", headers=auth_headers(client, admin))

    assert response.status_code == 403
    assert response.json()["code"] == "ADMIN_DELETE_FORBIDDEN"


def test_delete_unknown_user(client, db_session):
    admin = create_admin(db_session)
    headers = auth_headers(client, admin)

    missing = client.delete("/admin/users/00000000-0000-0000-0000-000000000000", headers=headers)
    malformed = client.delete("/admin/users/not-a-user", headers=headers)

    assert missing.status_code == 404
    assert missing.json()["code"] == "USER_NOT_FOUND"
    assert malformed.status_code == 404
