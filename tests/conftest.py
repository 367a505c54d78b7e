# tests/conftest.py

import os
import tempfile

# Environment must be in place before anything under app/ is imported
_TMP_DIR = tempfile.mkdtemp(prefix="taskpulse-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ADMIN_EMAILS"] = "admin@example.com"
os.environ["DEFAULT_TIMEZONE"] = "UTC"
os.environ.pop("FIREBASE_ADMIN_JSON", None)

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.database import Base, SessionLocal, engine
from app.services.account_service import register_account


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    # No context manager: the lifespan (and the real scheduler) never starts
    return TestClient(app)


@pytest.fixture()
def pushes(monkeypatch):
    """Records native pushes instead of calling FCM."""
    sent = []

    def fake_send(token, title, body, icon=None, tag=None, data=None):
        sent.append({"token": token, "title": title, "body": body, "icon": icon, "tag": tag})
        return "projects/test/messages/1"

    monkeypatch.setattr("app.services.notification_service.send_fcm_push", fake_send)
    return sent


@pytest.fixture()
def make_account(db):
    def _make(email="alice@example.com", username="alice", password="secret123", tz="UTC"):
        account = register_account(db, email, username, password)
        account.profile.timezone = tz
        db.commit()
        return account

    return _make
