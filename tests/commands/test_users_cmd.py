"""Tests for the users command group and init-db."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from userapi.cli import cli


def _create(cli_runner: CliRunner, name: str = "Alice", dob: str = "2000-01-01") -> int:
    result = cli_runner.invoke(cli, ["--json", "users", "create", name, dob])
    assert result.exit_code == 0, result.output
    return int(json.loads(result.stdout)["data"]["id"])


@pytest.mark.usefixtures("_isolated_root")
class TestInitDb:
    def test_creates_default_database(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["init-db"])
        assert result.exit_code == 0
        assert "OK: init_db" in result.stdout
        assert (tmp_path / "userapi.db").exists()

    def test_respects_env_database_url(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        target = tmp_path / "elsewhere.db"
        monkeypatch.setenv("USERAPI_DATABASE__URL", f"sqlite:///{target}")
        result = cli_runner.invoke(cli, ["--json", "init-db"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["ok"] is True
        assert target.exists()


@pytest.mark.usefixtures("_isolated_root")
class TestUsersCommands:
    def test_create_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "users", "create", "Alice", "2000-01-01"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "create_user"
        assert data["data"]["name"] == "Alice"
        assert "age" not in data["data"]

    def test_create_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["users", "create", "Alice", "2000-01-01"])
        assert result.exit_code == 0
        assert "OK: create_user" in result.stdout

    def test_create_invalid_date_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["users", "create", "Alice", "13/01/2020"])
        assert result.exit_code == 1
        assert "VALIDATION_ERROR" in result.stderr

    def test_get_includes_age(self, cli_runner: CliRunner) -> None:
        user_id = _create(cli_runner)
        result = cli_runner.invoke(cli, ["--json", "users", "get", str(user_id)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["id"] == user_id
        assert data["age"] >= 0

    def test_get_missing_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["users", "get", "999"])
        assert result.exit_code == 1
        assert "NOT_FOUND" in result.stderr

    def test_list_simple(self, cli_runner: CliRunner) -> None:
        _create(cli_runner, "Alice")
        _create(cli_runner, "Bob")
        result = cli_runner.invoke(cli, ["--json", "users", "list"])
        assert result.exit_code == 0
        users = json.loads(result.stdout)["data"]["users"]
        assert [u["name"] for u in users] == ["Alice", "Bob"]

    def test_list_human(self, cli_runner: CliRunner) -> None:
        _create(cli_runner, "Alice")
        result = cli_runner.invoke(cli, ["users", "list"])
        assert result.exit_code == 0
        assert "Alice" in result.stdout
        assert "2000-01-01" in result.stdout

    def test_list_paged(self, cli_runner: CliRunner) -> None:
        for name in ("A", "B", "C"):
            _create(cli_runner, name)
        result = cli_runner.invoke(cli, ["--json", "users", "list", "--page-size", "2"])
        data = json.loads(result.stdout)["data"]
        assert data["total"] == 3
        assert data["total_pages"] == 2
        assert len(data["users"]) == 2

    def test_update_and_delete(self, cli_runner: CliRunner) -> None:
        user_id = _create(cli_runner)
        updated = cli_runner.invoke(
            cli, ["--json", "users", "update", str(user_id), "Alicia", "1999-12-31"]
        )
        assert updated.exit_code == 0
        assert json.loads(updated.stdout)["data"]["name"] == "Alicia"

        deleted = cli_runner.invoke(cli, ["users", "delete", str(user_id)])
        assert deleted.exit_code == 0

        again = cli_runner.invoke(cli, ["users", "delete", str(user_id)])
        assert again.exit_code == 1
