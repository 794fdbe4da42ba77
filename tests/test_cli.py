"""Tests for CLI commands."""

import json
from collections.abc import Generator
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from adminkit.app import App
from adminkit.cli import cli
from adminkit.services.settings_service import SettingsService


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_app(app: App) -> Generator[App, None, None]:
    """Make CLI commands use the test app instead of building their own."""
    with patch("adminkit.cli.create_app", return_value=app):
        yield app


class TestInitDb:
    """Tests for init-db command."""

    def test_recreate_requires_safety_flag(self, runner: CliRunner):
        with patch("adminkit.cli.create_app") as create_app:
            result = runner.invoke(cli, ["init-db", "--recreate"])

        assert result.exit_code == 1
        assert "--yes-i-am-sure" in result.output
        create_app.assert_not_called()

    def test_tables_already_exist(self, runner: CliRunner, cli_app: App):
        result = runner.invoke(cli, ["init-db"])

        assert result.exit_code == 0
        assert "Using database: sqlite://" in result.output
        assert "Database is already up to date" in result.output

    def test_recreate(self, runner: CliRunner, cli_app: App):
        result = runner.invoke(cli, ["init-db", "--recreate", "--yes-i-am-sure"])

        assert result.exit_code == 0
        assert "Created 1 table(s):" in result.output
        assert "  - settings" in result.output

    def test_database_unreachable(self, runner: CliRunner, cli_app: App):
        with patch("adminkit.cli.check_db_connection", return_value=False):
            result = runner.invoke(cli, ["init-db"])

        assert result.exit_code == 1
        assert "Cannot connect to database" in result.output


class TestSettingsCommands:
    """Tests for the settings command group."""

    def test_get_default(self, runner: CliRunner, cli_app: App):
        result = runner.invoke(cli, ["settings", "get", "theme"])

        assert result.exit_code == 0
        assert json.loads(result.output) == "light"

    def test_get_stored(self, runner: CliRunner, cli_app: App, store: SettingsService):
        store.set("dashboard", {"widgets": []})

        result = runner.invoke(cli, ["settings", "get", "dashboard"])

        assert json.loads(result.output) == {"widgets": []}

    def test_set_parses_json(self, runner: CliRunner, cli_app: App, store: SettingsService):
        result = runner.invoke(cli, ["settings", "set", "per_page", "50"])

        assert result.exit_code == 0
        assert result.output.strip() == "per_page = 50"
        assert store.get("per_page") == 50

    def test_set_falls_back_to_string(
        self, runner: CliRunner, cli_app: App, store: SettingsService
    ):
        result = runner.invoke(cli, ["settings", "set", "theme", "dark"])

        assert result.exit_code == 0
        assert store.get("theme") == "dark"

    def test_set_scoped(self, runner: CliRunner, cli_app: App, store: SettingsService):
        result = runner.invoke(
            cli,
            ["settings", "set", "theme", '"dark"', "--target-type", "User", "--target-id", "5"],
        )

        assert result.exit_code == 0
        assert store.for_target("User", 5).get("theme") == "dark"
        assert store.get("theme") == "light"

    def test_list_with_prefix(self, runner: CliRunner, cli_app: App, store: SettingsService):
        store.set("user_name", "bob")

        result = runner.invoke(cli, ["settings", "list", "--prefix", "user_"])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            'user_locale = "en"',
            'user_name = "bob"',
        ]

    def test_list_empty(self, runner: CliRunner, cli_app: App):
        result = runner.invoke(cli, ["settings", "list", "--prefix", "nothing_"])

        assert result.exit_code == 0
        assert "No settings found" in result.output

    def test_delete(self, runner: CliRunner, cli_app: App, store: SettingsService):
        store.set("theme", "dark")

        result = runner.invoke(cli, ["settings", "delete", "theme"])

        assert result.exit_code == 0
        assert "Deleted theme" in result.output
        assert store.get("theme") == "light"

    def test_delete_missing(self, runner: CliRunner, cli_app: App):
        result = runner.invoke(cli, ["settings", "delete", "missing"])

        assert result.exit_code == 1
        assert 'Error: Setting variable "missing" not found' in result.output
