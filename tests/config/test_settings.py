"""Tests for UserApiSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from userapi.config.settings import UserApiSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("USERAPI_CONFIG", "USERAPI_DATABASE__URL", "USERAPI_SERVER__PORT"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = UserApiSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.verbose is False
        assert settings.server.host == "0.0.0.0"
        assert settings.server.port == 8080
        assert settings.database.url is None

    def test_default_database_is_sqlite_under_root(self, tmp_path: Path) -> None:
        settings = UserApiSettings.from_cli(root=tmp_path)
        assert settings.database_url == f"sqlite:///{tmp_path / 'userapi.db'}"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = UserApiSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "userapi.toml").write_text(
            '[server]\nport = 9000\n[database]\nurl = "sqlite:///other.db"\n'
        )
        settings = UserApiSettings.from_cli(root=tmp_path)
        assert settings.server.port == 9000
        assert settings.server.host == "0.0.0.0"  # default preserved
        assert settings.database_url == "sqlite:///other.db"

    def test_root_resolved_from_config_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "userapi.toml").write_text("[server]\nport = 9001\n")
        child = tmp_path / "deep" / "dir"
        child.mkdir(parents=True)
        monkeypatch.chdir(child)
        settings = UserApiSettings.from_cli()
        assert settings.root == tmp_path.resolve()
        assert settings.server.port == 9001

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "conf" / "custom.toml"
        custom.parent.mkdir()
        custom.write_text("[server]\nport = 7000\n")
        settings = UserApiSettings.from_cli(config_path=str(custom), root=tmp_path)
        assert settings.server.port == 7000
        assert settings.config_path == custom

    def test_invalid_toml_raises_click_exception(self, tmp_path: Path) -> None:
        (tmp_path / "userapi.toml").write_text("[server\nport = ")
        with pytest.raises(click.ClickException):
            UserApiSettings.from_cli(root=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "userapi.toml").write_text("[server]\nport = 9000\n")
        monkeypatch.setenv("USERAPI_SERVER__PORT", "9100")
        settings = UserApiSettings.from_cli(root=tmp_path)
        assert settings.server.port == 9100

    def test_env_database_url(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("USERAPI_DATABASE__URL", "mysql+pymysql://u:p@db/users")
        settings = UserApiSettings.from_cli(root=tmp_path)
        assert settings.database_url == "mysql+pymysql://u:p@db/users"

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "userapi.toml").write_text("verbose = true\n")
        settings = UserApiSettings.from_cli(root=tmp_path, verbose=False)
        assert settings.verbose is False
