"""Database engine setup.

SQLAlchemy Core (not ORM) over a pooled engine. SQLite is the default
store; any SQLAlchemy URL works (the MySQL deployment uses
``mysql+pymysql://``). The ``users`` table is created from
:data:`schema.metadata` on startup.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url

from userapi.infrastructure.database.schema import metadata


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for *url*, enabling foreign keys on SQLite."""
    engine = create_engine(url, echo=echo, pool_pre_ping=True)

    if make_url(url).get_backend_name() == "sqlite":

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def init_database(url: str, *, echo: bool = False) -> Engine:
    """Create the engine and the ``users`` table.

    Idempotent — safe to call against an existing database.

    Returns the engine ready for use.
    """
    engine = create_db_engine(url, echo=echo)
    metadata.create_all(engine)
    return engine
