from tests.showroom_helpers import PASSWORD, create_admin, create_showroom, login


def test_login_success_for_showroom(client, db_session):
    showroom = create_showroom(db_session, "a")

    response = client.post("/auth/login", json={"username": "showroom-a", "password": PASSWORD})

    assert response.status_code == 200
    payload = response.json()
    assert payload["access_token"]
    assert payload["token_type"] == "bearer"
    assert payload["role"] == "showroom"
    assert payload["showroom_id"] == str(showroom.id)


def test_login_admin_has_no_showroom(client, db_session):
    create_admin(db_session)

    response = client.post("/auth/login", json={"username": "admin-root", "password": PASSWORD})

    assert response.status_code == 200
    assert response.json()["role"] == "admin"
    assert response.json()["showroom_id"] is None


def test_login_invalid_password(client, db_session):
    create_showroom(db_session, "a")

    response = client.post("/auth/login", json={"username": "showroom-a", "password": "wrong-pass"})

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_CREDENTIALS"


def test_login_unknown_user(client):
    response = client.post("/auth/login", json={"username": "ghost", "password": PASSWORD})

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_CREDENTIALS"


def test_login_blocked_inactive(client, db_session):
    create_showroom(db_session, "a", is_active=False)

    response = client.post("/auth/login", json={"username": "showroom-a", "password": PASSWORD})

    assert response.status_code == 403
    assert response.json()["code"] == "USER_INACTIVE"


def test_oauth2_token_form_login(client, db_session):
    create_showroom(db_session, "a")

    response = client.post(
        "/auth/token",
        content=f"username=showroom-a&password={PASSWORD}",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    assert response.status_code == 200
    assert response.json()["access_token"]


def test_me_returns_identity(client, db_session):
    showroom = create_showroom(db_session, "a")
    token = login(client, showroom.username)

    response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["id"] == str(showroom.id)
    assert payload["showroom_id"] == str(showroom.id)
    assert payload["showroom_name"] == "Showroom a"


def test_me_requires_token(client):
    response = client.get("/me")

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_me_rejects_garbage_token(client):
    response = client.get("/me", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_TOKEN"


def test_token_of_deactivated_user_is_refused(client, db_session):
    showroom = create_showroom(db_session, "a")
    token = login(client, showroom.username)
    showroom.is_active = False
    db_session.commit()

    response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403
    assert response.json()["code"] == "USER_INACTIVE"
