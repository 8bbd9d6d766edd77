"""Pytest configuration and shared fixtures."""

import os
from typing import AsyncGenerator, Generator

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from app.application import create_app
from app.config import Settings, get_settings
from app.models.document import CalendarSettings, Document, TeacherConfig
from app.storage.memory import InMemoryBackend


@pytest.fixture(scope="session", autouse=True)
def test_settings() -> Settings:
    """Create test settings instance."""
    # Override environment variables for testing
    os.environ.setdefault("API_TITLE", "Slot Reservations Test")
    os.environ.setdefault("API_VERSION", "0.1.0-test")
    os.environ.setdefault("ENVIRONMENT", "testing")
    os.environ.pop("GOOGLE_SHEET_ID", None)
    get_settings.cache_clear()

    return get_settings()


@pytest.fixture
def roster_document() -> Document:
    """Create a document with two teachers and no claims."""
    return Document(
        settings=CalendarSettings(
            teachers=[
                TeacherConfig(id=1, name="Ms. Novak", interval=10),
                TeacherConfig(id=2, name="Mr. Dvorak", interval=15),
            ],
            admin_password="secret",
        ),
        reservations={"Ms. Novak": {}, "Mr. Dvorak": {}},
    )


@pytest.fixture
def storage(roster_document: Document) -> InMemoryBackend:
    """Create in-memory backend seeded with the roster document."""
    return InMemoryBackend(roster_document)


@pytest.fixture
def app(storage: InMemoryBackend) -> Generator:
    """Create FastAPI application instance for testing."""
    app = create_app(storage=storage)
    yield app


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Create test client for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for FastAPI application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as async_test_client:
        yield async_test_client
