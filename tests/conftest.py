"""Pytest configuration and shared fixtures.

The environment is pinned before the application is imported so every test talks to a
private in-memory SQLite database and a known bootstrap admin.
"""
import os
import uuid

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["NOTIFICATION_BACKEND"] = "log"
os.environ["BOOTSTRAP_ADMIN_CONTACT"] = "admin@example.com"
os.environ["BOOTSTRAP_ADMIN_PASSWORD"] = "admin-pass"
os.environ["API_PREFIX"] = ""

import pytest
from fastapi.testclient import TestClient

from main import app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-pass"


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class RecordingNotifier:
    """Stands in for the notification collaborator and records every call."""

    def __init__(self):
        self.calls = []

    async def notify(self, address, subject, template_key, substitutions):
        self.calls.append((address, subject, template_key, substitutions))


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}


@pytest.fixture(scope="session")
def admin_headers(client) -> dict:
    res = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert res.status_code == 200, res.text
    return auth_header(res.json()["token"])


@pytest.fixture
def register(client):
    """Factory: register a fresh policyholder and log in; returns id, contact, email and headers."""

    def _register(name: str = "Jane", password: str = "pw123") -> dict:
        suffix = uuid.uuid4().hex[:10]
        contact = f"555-{suffix}"
        email = f"{suffix}@example.com"
        res = client.post(
            "/auth/register",
            json={"name": name, "contact": contact, "email": email, "password": password},
        )
        assert res.status_code == 201, res.text
        login = client.post("/auth/login", json={"contact": contact, "password": password})
        assert login.status_code == 200, login.text
        token = login.json()["token"]
        return {
            "id": res.json()["id"],
            "contact": contact,
            "email": email,
            "token": token,
            "headers": auth_header(token),
        }

    return _register


@pytest.fixture
def make_policy(client, admin_headers):
    """Factory: create a direct policy for a user, approving it by default."""

    def _make_policy(user: dict, amount: float = 5000, approve: bool = True) -> dict:
        res = client.post(
            "/policies",
            headers=user["headers"],
            json={"type": "health", "amount": amount, "startDate": "2024-01-01", "endDate": "2030-01-01"},
        )
        assert res.status_code == 201, res.text
        policy = res.json()
        if approve:
            decided = client.post(
                f"/admin/approvePolicy/{policy['id']}", headers=admin_headers, json={"decision": True}
            )
            assert decided.status_code == 200, decided.text
            policy = decided.json()["policy"]
        return policy

    return _make_policy


@pytest.fixture
def notifier():
    from services.notifications import get_notifier

    fake = RecordingNotifier()
    app.dependency_overrides[get_notifier] = lambda: fake
    return fake
