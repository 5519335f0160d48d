"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, userapi.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class ServerConfig(BaseModel):
    """[server] section."""

    model_config = {"frozen": True}

    host: str = "0.0.0.0"
    port: int = 8080


class DatabaseConfig(BaseModel):
    """[database] section.

    ``url`` is any SQLAlchemy database URL. When unset the service uses a
    SQLite file named ``userapi.db`` under the resolved project root.
    """

    model_config = {"frozen": True}

    url: str | None = None
    echo: bool = False
