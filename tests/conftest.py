"""Shared fixtures: an app on the in-memory store and an HTTP client for it."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from folio.config import Settings
from folio.db.memory_store import MemoryStore
from folio.main import create_app

TEST_SECRET = "test-secret-with-at-least-32-bytes!!"
PASSWORD = "Secret123!"


@pytest.fixture
def settings():
    return Settings(jwt_secret=TEST_SECRET, bcrypt_rounds=4, database_url="", log_level="WARNING")


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def register(client, name: str, email: str) -> dict:
    """Register a user and return headers carrying their token."""
    response = await client.post(
        "/api/user",
        json={"name": name, "email": email, "password": PASSWORD},
    )
    assert response.status_code == 200, response.text
    return {"x-auth-token": response.json()["token"]}
