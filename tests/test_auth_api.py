# tests/test_auth_api.py

from app.models.account import AuthAccount
from app.models.audit_log import AuditLog
from app.services.dashboard_session import dashboard_sessions

from .helpers import auth_headers


def _register(client, **overrides):
    payload = {
        "username": "alice",
        "email": "alice@example.com",
        "password": "secret123",
        "confirm_password": "secret123",
    }
    payload.update(overrides)
    return client.post("/auth/register", json=payload)


def test_register_creates_user_profile(client, db) -> None:
    response = _register(client)

    assert response.status_code == 201
    user = response.json()["user"]
    assert user["username"] == "alice"
    assert user["role"] == "user"
    assert user["notification_permission"] == "default"


def test_password_mismatch_never_reaches_the_store(client, db) -> None:
    response = _register(client, confirm_password="other")

    assert response.status_code == 422
    assert "Passwords do not match." in response.text
    assert db.query(AuthAccount).count() == 0


def test_short_username_is_rejected(client, db) -> None:
    response = _register(client, username="al")

    assert response.status_code == 422
    assert "Username must be at least 3 characters." in response.text
    assert db.query(AuthAccount).count() == 0


def test_duplicate_email(client) -> None:
    _register(client)

    response = _register(client, username="alice2", email="ALICE@example.com")

    assert response.status_code == 400


def test_login_returns_token_and_home_view(client, db) -> None:
    _register(client)

    response = client.post("/auth/login", json={"email": "alice@example.com", "password": "secret123"})

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["view"] == "dashboard/active"
    assert db.query(AuditLog).filter(AuditLog.action == "login").one().username == "alice"


def test_admin_login_lands_on_admin_home(client) -> None:
    _register(client, username="admin", email="admin@example.com")

    response = client.post("/auth/login", json={"email": "admin@example.com", "password": "secret123"})

    assert response.json()["role"] == "admin"
    assert response.json()["view"] == "admin/home"


def test_bad_credentials(client, db) -> None:
    _register(client)

    response = client.post("/auth/login", json={"email": "alice@example.com", "password": "nope"})

    assert response.status_code == 400
    assert db.query(AuditLog).count() == 0


def test_me_requires_token(client) -> None:
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_logout_is_audited(client, db) -> None:
    headers = auth_headers(client, "alice@example.com")

    response = client.post("/auth/logout", headers=headers)

    assert response.status_code == 200
    assert db.query(AuditLog).filter(AuditLog.action == "logout").count() == 1


def test_settings_update_username_and_password(client) -> None:
    headers = auth_headers(client, "alice@example.com")

    response = client.put("/auth/settings", headers=headers, json={
        "username": "alice_w", "new_password": "n3wpass!", "timezone": "Europe/Berlin"
    })

    assert response.status_code == 200
    assert response.json()["user"]["username"] == "alice_w"
    assert response.json()["user"]["timezone"] == "Europe/Berlin"
    assert client.post("/auth/login", json={"email": "alice@example.com", "password": "n3wpass!"}).status_code == 200


def test_blank_password_keeps_the_old_one(client) -> None:
    headers = auth_headers(client, "alice@example.com")

    client.put("/auth/settings", headers=headers, json={"new_password": "   "})

    assert client.post("/auth/login", json={"email": "alice@example.com", "password": "secret123"}).status_code == 200


def test_unknown_timezone_is_rejected(client) -> None:
    headers = auth_headers(client, "alice@example.com")

    response = client.put("/auth/settings", headers=headers, json={"timezone": "Mars/Olympus"})

    assert response.status_code == 400


def test_logout_closes_open_dashboards(client) -> None:
    headers = auth_headers(client, "alice@example.com")
    first = client.post("/dashboard/mount", headers=headers).json()["session_id"]
    second = client.post("/dashboard/mount", headers=headers).json()["session_id"]

    client.post("/auth/logout", headers=headers)

    assert not dashboard_sessions.has_timers(first)
    assert not dashboard_sessions.has_timers(second)
    assert client.get(f"/dashboard/{first}", headers=headers).status_code == 404
