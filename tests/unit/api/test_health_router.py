"""Unit tests for the health endpoints."""

from fastapi.testclient import TestClient

from src.broker_api.api.http.app import create_app
from tests.fixtures.dummies import SwitchableDatabase


def test_liveness(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "api"}


def test_readiness_with_reachable_database(client):
    response = client.get("/health/ready")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ready"
    assert body["checks"]["database"]["status"] == "healthy"


def test_readiness_reports_lost_database():
    database = SwitchableDatabase()

    with TestClient(create_app(database=database)) as client:
        database.healthy = False
        response = client.get("/health/ready")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "not_ready"
    assert body["checks"]["database"]["status"] == "unhealthy"


def test_database_health_without_pool(client):
    response = client.get("/health/database")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "pool": {}}


def test_database_health_unreachable():
    database = SwitchableDatabase()

    with TestClient(create_app(database=database)) as client:
        database.healthy = False
        response = client.get("/health/database")

    assert response.status_code == 503
    assert response.json()["error_type"] == "DatabaseError"
