# tests/test_task_api.py

from app.models.audit_log import AuditLog

from .helpers import auth_headers


def _create(client, headers, **fields):
    fields.setdefault("title", "Buy milk")
    response = client.post("/tasks", headers=headers, json=fields)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_list_active(client, db) -> None:
    headers = auth_headers(client, "alice@example.com")

    task = _create(client, headers, description="  2 litres ", due_date="2026-03-10", due_time="18:00")

    assert task["description"] == "2 litres"
    assert task["due_time"] == "18:00:00"
    assert task["section"] == "active"
    listed = client.get("/tasks", headers=headers, params={"section": "active"}).json()
    assert [t["id"] for t in listed] == [task["id"]]

    entry = db.query(AuditLog).filter(AuditLog.action == "create_task").one()
    assert entry.entity_id == str(task["id"])
    assert entry.details == {"title": "Buy milk"}


def test_blank_title_is_rejected(client) -> None:
    headers = auth_headers(client, "alice@example.com")

    response = client.post("/tasks", headers=headers, json={"title": "   "})

    assert response.status_code == 422


def test_edit_records_only_changed_fields(client, db) -> None:
    headers = auth_headers(client, "alice@example.com")
    task = _create(client, headers, description="2 litres")

    response = client.patch(f"/tasks/{task['id']}", headers=headers, json={
        "title": "Buy bread", "description": "2 litres"
    })

    assert response.status_code == 200
    assert response.json()["changes"] == {"title": {"from": "Buy milk", "to": "Buy bread"}}
    entry = db.query(AuditLog).filter(AuditLog.action == "edit_task").one()
    assert entry.details["title"] == "Buy bread"
    assert entry.details["changes"]["title"] == {"from": "Buy milk", "to": "Buy bread"}
    assert "description" not in entry.details["changes"]


def test_finish_then_archive(client, db) -> None:
    headers = auth_headers(client, "alice@example.com")
    task = _create(client, headers)

    finished = client.post(f"/tasks/{task['id']}/finish", headers=headers).json()
    assert finished["section"] == "finished"
    archived = client.post(f"/tasks/{task['id']}/archive", headers=headers).json()
    assert archived["section"] == "archived"

    actions = {entry.action for entry in db.query(AuditLog).all()}
    assert {"create_task", "finish_task", "archive_task"} <= actions


def test_archive_without_finishing(client) -> None:
    headers = auth_headers(client, "alice@example.com")
    task = _create(client, headers)

    archived = client.post(f"/tasks/{task['id']}/archive", headers=headers).json()

    assert archived["is_archived"] is True
    assert archived["is_completed"] is False
    assert client.get("/tasks", headers=headers, params={"section": "archived"}).json()[0]["id"] == task["id"]
    assert client.get("/tasks", headers=headers, params={"section": "active"}).json() == []


def test_archived_tasks_are_frozen(client) -> None:
    headers = auth_headers(client, "alice@example.com")
    task = _create(client, headers)
    client.post(f"/tasks/{task['id']}/archive", headers=headers)

    assert client.post(f"/tasks/{task['id']}/finish", headers=headers).status_code == 409
    assert client.patch(f"/tasks/{task['id']}", headers=headers, json={"title": "x"}).status_code == 409


def test_other_users_tasks_are_invisible(client) -> None:
    alice = auth_headers(client, "alice@example.com")
    bob = auth_headers(client, "bob@example.com")
    task = _create(client, alice)

    assert client.get("/tasks", headers=bob).json() == []
    assert client.patch(f"/tasks/{task['id']}", headers=bob, json={"title": "mine"}).status_code == 404
    assert client.post(f"/tasks/{task['id']}/archive", headers=bob).status_code == 404


def test_unknown_section(client) -> None:
    headers = auth_headers(client, "alice@example.com")

    assert client.get("/tasks", headers=headers, params={"section": "deleted"}).status_code == 400


def test_audit_failure_does_not_fail_the_edit(client, monkeypatch) -> None:
    headers = auth_headers(client, "alice@example.com")
    task = _create(client, headers)

    def broken_session():
        raise RuntimeError("audit store down")

    monkeypatch.setattr("app.services.audit_logger.SessionLocal", broken_session)

    response = client.patch(f"/tasks/{task['id']}", headers=headers, json={"title": "Buy bread"})

    assert response.status_code == 200
    assert response.json()["title"] == "Buy bread"
