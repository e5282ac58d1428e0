"""Login and current-user endpoints."""

from app.crud import crud_user


def test_login_returns_token(client, admin_user):
    response = client.post(
        "/api/auth/login",
        data={"username": "ADMIN@example.com", "password": "secret123"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "admin@example.com"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["data"]["role"] == "admin"


def test_login_with_wrong_password(client, admin_user):
    response = client.post("/api/auth/login", data={"username": admin_user.email, "password": "nope"})
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Incorrect email or password"}


def test_inactive_user_cannot_login(client, db):
    user = crud_user.create_user(db, email="gone@example.com", password="pw123456", role="editor")
    user.is_active = False
    db.commit()
    response = client.post("/api/auth/login", data={"username": "gone@example.com", "password": "pw123456"})
    assert response.status_code == 401


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401
