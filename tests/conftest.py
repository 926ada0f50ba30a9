"""Pytest configuration and fixtures.

Every test gets its own app built from TestingConfig, which points at a
fresh in-memory SQLite database.
"""

import pytest

from api import create_app
from utils.security import hash_password

TEST_EMAIL = "a@b.com"
TEST_PASSWORD = "secret123"


@pytest.fixture
def app(tmp_path):
    app = create_app("testing", {"FILESERVER_ROOT": str(tmp_path)})
    yield app
    app.extensions["storage"].drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage(app):
    storage = app.extensions["storage"]
    yield storage
    storage.close()


@pytest.fixture
def auth_service(app):
    return app.extensions["auth"]


@pytest.fixture
def user(storage):
    """A stored user whose password is TEST_PASSWORD."""
    return storage.create_user(email=TEST_EMAIL, hashed_password=hash_password(TEST_PASSWORD))


@pytest.fixture
def make_user(client):
    """Register a user through the API and log in; returns the login payload."""

    def _make(email=TEST_EMAIL, password=TEST_PASSWORD):
        response = client.post("/api/users", json={"email": email, "password": password})
        assert response.status_code == 201, response.get_json()
        response = client.post("/api/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.get_json()
        return response.get_json()

    return _make


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
