"""Test configuration and fixtures for the broker retailer API."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.broker_api.api.http.app import create_app
from src.broker_api.core.services import MockDatabase


@pytest.fixture
def mock_db() -> MockDatabase:
    """A fresh mock database with no expectations registered."""
    return MockDatabase()


@pytest.fixture(name="client")
def client_fixture(mock_db: MockDatabase) -> Generator[TestClient]:
    """Test client for an app wired to ``mock_db``; runs startup and shutdown."""
    app = create_app(database=mock_db)
    with TestClient(app) as client:
        yield client
