"""Pytest configuration and fixtures."""
import os

os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("MONGODB_DB_NAME", "fitness_goals_test")

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from fitgoals.config import settings
from fitgoals.database import ensure_indexes, get_database
from fitgoals.main import app


@pytest_asyncio.fixture
async def test_db():
    """In-memory MongoDB database with the production indexes."""
    client = AsyncMongoMockClient()
    db = client[settings.mongodb_db_name]
    await ensure_indexes(db)
    yield db


@pytest_asyncio.fixture
async def app_client(test_db):
    """
    Create a test client bound to a clean in-memory database.

    The ``get_database`` dependency is overridden for the duration of the
    test, so the application lifespan (real MongoDB) never runs.
    """

    async def override_get_database():
        return test_db

    app.dependency_overrides[get_database] = override_get_database

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.pop(get_database, None)


@pytest_asyncio.fixture
async def login_as(app_client):
    """Return a coroutine that signs up a user and returns bearer headers."""

    async def _login_as(username="testuser", email="test@example.com", password="password123"):
        await app_client.post(
            "/auth/signup",
            json={"username": username, "email": email, "password": password},
        )
        response = await app_client.post(
            "/auth/login",
            json={"email": email, "password": password},
        )
        token = response.json()["token"]
        return {"Authorization": f"Bearer {token}"}

    return _login_as
