"""Application lifecycle: startup must fail fast on a broken database."""

import pytest
from fastapi.testclient import TestClient

from src.broker_api.api.http.app import create_app
from src.broker_api.core.exceptions import ConfigurationError, DatabaseError
from src.broker_api.core.services import MockDatabase
from src.broker_api.runtime.config.config_data import ConfigData, DatabaseConfig
from src.broker_api.runtime.context import with_context
from tests.fixtures.dummies import SwitchableDatabase


class TestStartup:
    def test_failed_health_check_prevents_serving(self):
        database = SwitchableDatabase(healthy=False)
        app = create_app(database=database)

        with pytest.raises(DatabaseError, match="connection refused"):
            with TestClient(app):
                pass

        assert database.health_checks == 1

    def test_missing_database_url_prevents_serving(self):
        with with_context(ConfigData(database=DatabaseConfig(url=""))):
            app = create_app()

        with pytest.raises(ConfigurationError, match="DATABASE_URL"):
            with TestClient(app):
                pass

    def test_unparsable_database_url_prevents_serving(self):
        with with_context(ConfigData(database=DatabaseConfig(url="not a url"))):
            app = create_app()

        with pytest.raises(ConfigurationError):
            with TestClient(app):
                pass

    def test_injected_database_is_closed_on_shutdown(self):
        database = SwitchableDatabase()

        with TestClient(create_app(database=database)) as client:
            assert client.get("/health").status_code == 200
            assert not database.closed

        assert database.closed

    def test_each_app_gets_its_own_database(self):
        first, second = MockDatabase(), MockDatabase()
        first.expect_query(r"sp_get_order_status").will_return_rows(
            ["order_id", "order_status"], (1, "Processing")
        )

        with TestClient(create_app(database=first)) as client_a, TestClient(
            create_app(database=second)
        ) as client_b:
            assert len(client_a.get("/order-statuses").json()) == 1
            assert client_b.get("/order-statuses").status_code == 500

        first.assert_expectations_met()
        assert second.calls[0][0] == "query"


class TestSqliteBackedApp:
    """Full wiring with the pooled implementation on an in-memory database."""

    @pytest.fixture
    def sqlite_client(self):
        with with_context(ConfigData(database=DatabaseConfig(url="sqlite://"))):
            app = create_app()
        with TestClient(app) as client:
            yield client

    def test_database_health_reports_pool(self, sqlite_client):
        response = sqlite_client.get("/health/database")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "checked_out" in response.json()["pool"]

    def test_procedure_failure_surfaces_as_server_error(self, sqlite_client):
        # SQLite has no sp_get_order_status(); the driver error must stay server-side
        response = sqlite_client.get("/order-statuses")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch order statuses"}


class TestMiddleware:
    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_security_headers(self, client):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_unknown_route_uses_error_body(self, client):
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        assert "error" in response.json()
