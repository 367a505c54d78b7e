# tests/helpers.py

from types import SimpleNamespace


def auth_headers(client, email, password="secret123", username=None):
    """Registers (if needed) and signs in through the API; returns bearer headers."""
    client.post("/auth/register", json={
        "username": username or email.split("@")[0],
        "email": email,
        "password": password,
        "confirm_password": password,
    })
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def due_at(date_value, time_value=None):
    """Stand-in for a Task row when only the due moment matters."""
    return SimpleNamespace(due_date=date_value, due_time=time_value)
