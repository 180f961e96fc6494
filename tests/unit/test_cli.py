"""Tests for the command line interface."""

from typer.testing import CliRunner

from src.broker_api.cli import app
from src.broker_api.runtime.config.config_data import ConfigData, DatabaseConfig
from src.broker_api.runtime.context import with_context

runner = CliRunner()


class TestCheckDb:
    def test_reachable_database(self):
        with with_context(ConfigData(database=DatabaseConfig(url="sqlite://"))):
            result = runner.invoke(app, ["check-db"])

        assert result.exit_code == 0
        assert "Database is reachable" in result.output
        assert "checked_out" in result.output

    def test_missing_url_exits_with_error(self):
        with with_context(ConfigData(database=DatabaseConfig(url=""))):
            result = runner.invoke(app, ["check-db"])

        assert result.exit_code == 1
        assert "DATABASE_URL" in result.output

    def test_unreachable_database_exits_with_error(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'missing' / 'app.db'}"
        with with_context(ConfigData(database=DatabaseConfig(url=url))):
            result = runner.invoke(app, ["check-db"])

        assert result.exit_code == 1
        assert "Failed to ping database" in result.output


def test_no_arguments_shows_help():
    result = runner.invoke(app, [])

    assert "check-db" in result.output
    assert "serve" in result.output
