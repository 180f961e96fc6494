"""Tests for the pooled database against an in-memory SQLite engine."""

from collections.abc import Generator

import pytest

from src.broker_api.core.exceptions import ConfigurationError, DatabaseError
from src.broker_api.core.services import PooledDatabase
from src.broker_api.runtime.config.config_data import ConfigData, DatabaseConfig


@pytest.fixture
def database() -> Generator[PooledDatabase, None, None]:
    db = PooledDatabase(ConfigData(database=DatabaseConfig(url="sqlite://")))
    db.execute(
        "CREATE TABLE order_status (order_id INTEGER PRIMARY KEY, order_status TEXT NOT NULL)"
    )
    yield db
    db.close()


class TestQuery:
    def test_rows_are_mappings_keyed_by_column(self, database):
        assert database.query("SELECT 1 AS one, 'a' AS letter") == [{"one": 1, "letter": "a"}]

    def test_positional_arguments_bind_in_order(self, database):
        rows = database.query("SELECT :p1 AS first, :p2 AS second", ("x", 2))

        assert rows == [{"first": "x", "second": 2}]

    def test_row_order_follows_the_statement(self, database):
        for order_id, name in [(1, "Processing"), (2, "Confirmed"), (3, "Payment")]:
            database.execute("INSERT INTO order_status VALUES (:p1, :p2)", (order_id, name))

        rows = database.query("SELECT * FROM order_status ORDER BY order_id DESC")

        assert [row["order_status"] for row in rows] == ["Payment", "Confirmed", "Processing"]
        assert all(isinstance(row["order_id"], int) for row in rows)

    def test_invalid_statement_raises_database_error(self, database):
        with pytest.raises(DatabaseError):
            database.query("SELECT * FROM sp_get_order_status()")


class TestExecute:
    def test_returns_command_tag_and_rowcount(self, database):
        result = database.execute(
            "INSERT INTO order_status VALUES (:p1, :p2)", (1, "Processing")
        )

        assert result.tag == "INSERT"
        assert result.rows_affected == 1

    def test_changes_are_committed(self, database):
        database.execute("INSERT INTO order_status VALUES (:p1, :p2)", (7, "Returned"))

        assert database.query("SELECT order_status FROM order_status WHERE order_id = :p1", (7,)) == [
            {"order_status": "Returned"}
        ]

    def test_failed_statement_is_rolled_back(self, database):
        database.execute("INSERT INTO order_status VALUES (:p1, :p2)", (1, "Processing"))

        with pytest.raises(DatabaseError):
            database.execute("INSERT INTO order_status VALUES (:p1, :p2)", (1, "Duplicate"))

        rows = database.query("SELECT * FROM order_status")
        assert rows == [{"order_id": 1, "order_status": "Processing"}]


class TestLifecycle:
    def test_health_check_passes(self, database):
        database.health_check()

    def test_pool_status_reports_counters(self, database):
        assert set(database.get_pool_status()) == {"size", "checked_in", "checked_out", "overflow"}

    def test_missing_url_is_a_configuration_error(self):
        with pytest.raises(ConfigurationError, match="DATABASE_URL"):
            PooledDatabase(ConfigData(database=DatabaseConfig(url="")))

    def test_unparsable_url_is_a_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Unable to parse"):
            PooledDatabase(ConfigData(database=DatabaseConfig(url="::not-a-url::")))

    def test_unreachable_database_fails_health_check(self, tmp_path):
        missing = tmp_path / "missing" / "app.db"
        db = PooledDatabase(ConfigData(database=DatabaseConfig(url=f"sqlite:///{missing}")))

        with pytest.raises(DatabaseError, match="Failed to ping database"):
            db.health_check()
        db.close()
