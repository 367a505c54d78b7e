# tests/test_admin_api.py

from app.models.account import AuthAccount
from app.models.audit_log import AuditLog
from app.models.task import Task
from app.services.dashboard_session import dashboard_sessions

from .helpers import auth_headers


def test_admin_routes_need_admin_role(client) -> None:
    headers = auth_headers(client, "alice@example.com")

    assert client.get("/admin/users", headers=headers).status_code == 403
    assert client.get("/admin/audit-logs", headers=headers).status_code == 403


def test_user_listing_excludes_admins(client) -> None:
    admin = auth_headers(client, "admin@example.com")
    auth_headers(client, "alice@example.com")
    auth_headers(client, "bob@example.com")

    users = client.get("/admin/users", headers=admin).json()

    assert sorted(u["username"] for u in users) == ["alice", "bob"]
    assert all(u["role"] == "user" for u in users)


def test_rename_user(client) -> None:
    admin = auth_headers(client, "admin@example.com")
    auth_headers(client, "alice@example.com")
    user_id = client.get("/admin/users", headers=admin).json()[0]["id"]

    assert client.patch(f"/admin/users/{user_id}", headers=admin, json={"username": "al"}).status_code == 422
    renamed = client.patch(f"/admin/users/{user_id}", headers=admin, json={"username": "alicia"})

    assert renamed.json()["username"] == "alicia"


def test_delete_user_keeps_audit_trail(client, db) -> None:
    admin = auth_headers(client, "admin@example.com")
    alice = auth_headers(client, "alice@example.com")
    client.post("/tasks", headers=alice, json={"title": "Buy milk"})
    user_id = client.get("/admin/users", headers=admin).json()[0]["id"]

    assert client.delete(f"/admin/users/{user_id}", headers=admin).json() == {"status": "deleted"}

    assert db.query(AuthAccount).filter(AuthAccount.id == user_id).first() is None
    assert db.query(Task).count() == 0
    assert db.query(AuditLog).filter(AuditLog.user_id == user_id).count() >= 2
    assert client.delete(f"/admin/users/{user_id}", headers=admin).status_code == 404


def test_admin_cannot_delete_self(client) -> None:
    admin = auth_headers(client, "admin@example.com")
    admin_id = client.get("/auth/me", headers=admin).json()["id"]

    assert client.delete(f"/admin/users/{admin_id}", headers=admin).status_code == 400


def test_audit_logs_newest_first_and_filtered(client) -> None:
    admin = auth_headers(client, "admin@example.com")
    alice = auth_headers(client, "alice@example.com")
    client.post("/tasks", headers=alice, json={"title": "Buy milk"})

    logs = client.get("/admin/audit-logs", headers=admin).json()
    assert logs[0]["action"] == "create_task"
    assert logs[0]["details"] == {"title": "Buy milk"}

    logins = client.get("/admin/audit-logs", headers=admin, params={"action": "login"}).json()
    assert {entry["username"] for entry in logins} == {"admin", "alice"}

    assert client.get("/admin/audit-logs", headers=admin, params={"action": "drop_table"}).status_code == 400


def test_audit_log_timestamps_carry_utc_offset(client) -> None:
    admin = auth_headers(client, "admin@example.com")

    logs = client.get("/admin/audit-logs", headers=admin).json()

    assert logs[0]["action"] == "login"
    assert logs[0]["created_at"].endswith("+00:00")


def test_deleting_a_user_closes_their_dashboards(client) -> None:
    admin = auth_headers(client, "admin@example.com")
    alice = auth_headers(client, "alice@example.com")
    session_id = client.post("/dashboard/mount", headers=alice).json()["session_id"]
    user_id = client.get("/auth/me", headers=alice).json()["id"]
    assert dashboard_sessions.has_timers(session_id)

    client.delete(f"/admin/users/{user_id}", headers=admin)

    assert not dashboard_sessions.has_timers(session_id)
    assert dashboard_sessions.unmount(session_id) is False
