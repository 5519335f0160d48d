"""Shared pytest fixtures for userapi tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date
from pathlib import Path

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from userapi.api.app import create_app
from userapi.config.settings import UserApiSettings
from userapi.infrastructure.database.engine import init_database
from userapi.infrastructure.repositories import UserRepository
from userapi.services.users import UserService

# Reference "today" for age assertions. 2024 is a leap year.
FIXED_TODAY = date(2024, 6, 15)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def db_engine(db_url: str) -> Iterator[Engine]:
    """Initialized SQLite engine with the users table created."""
    engine = init_database(db_url)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def repo(db_engine: Engine) -> UserRepository:
    return UserRepository(db_engine)


@pytest.fixture
def service(repo: UserRepository) -> UserService:
    """UserService whose clock is pinned to ``FIXED_TODAY``."""
    return UserService(repo, clock=lambda: FIXED_TODAY)


@pytest.fixture
def client(tmp_path: Path, db_engine: Engine, service: UserService) -> Iterator[TestClient]:
    """TestClient over an app sharing the fixture engine and pinned clock."""
    settings = UserApiSettings.from_cli(root=tmp_path)
    app = create_app(settings, engine=db_engine)
    app.state.user_service = service
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from a temp directory with no config or env overrides.

    The default SQLite database then lands in ``tmp_path/userapi.db``.
    """
    monkeypatch.delenv("USERAPI_CONFIG", raising=False)
    monkeypatch.delenv("USERAPI_DATABASE__URL", raising=False)
    monkeypatch.chdir(tmp_path)
