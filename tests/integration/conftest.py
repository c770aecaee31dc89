"""Shared fixtures for API integration tests.

Each test gets an application built by ``create_app`` around a fresh
in-memory SQLite database, driven through ``httpx.AsyncClient``.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Generator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from greenlight.api.main import create_app
from greenlight.database.connection import DatabaseConnection

# ---------------------------------------------------------------------------
# Auto-mark all tests in this directory as "integration"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply ``@pytest.mark.integration`` to every test collected here."""
    integration_marker = pytest.mark.integration
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(integration_marker)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def app(database: DatabaseConnection) -> Generator[FastAPI, None, None]:
    """Application wired to the test database."""
    application = create_app(database)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide an ``httpx.AsyncClient`` wired to the app."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def created_movie(client: AsyncClient, movie_payload: dict) -> dict:
    """Create one movie through the API and return its body."""
    resp = await client.post("/v1/movies", json=movie_payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["movie"]
