"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from bookshelf.core.config import Settings
from bookshelf.core.dependencies import get_db
from bookshelf.main import create_app

TEST_SECRET = "test-secret-key"


@pytest.fixture
def settings():
    """Settings backed by a private in-memory database."""
    return Settings(
        database_url="sqlite+aiosqlite://",
        secret_key=TEST_SECRET,
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client with the application lifespan (schema creation) running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registration_payload():
    return {
        "first_name": "John",
        "last_name": "Doe",
        "username": "johndoe",
        "password": "Abcdef1!",
        "email": "johndoe@example.com",
    }


@pytest.fixture
def registered_user(client, registration_payload):
    response = client.post("/register", json=registration_payload)
    assert response.status_code == 201
    return response.json()["data"]


class _BrokenSession:
    """Session stand-in whose every store call fails like a dropped connection."""

    def _fail(self):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    def add(self, instance):
        pass

    async def execute(self, *args, **kwargs):
        self._fail()

    async def flush(self, *args, **kwargs):
        self._fail()

    async def commit(self):
        self._fail()

    async def rollback(self):
        pass


@pytest.fixture
def broken_store(app):
    """Route every request to a session whose store calls raise."""

    async def broken_db():
        yield _BrokenSession()

    app.dependency_overrides[get_db] = broken_db
    yield
    app.dependency_overrides.pop(get_db, None)
