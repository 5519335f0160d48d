"""Database engine and schema via SQLAlchemy Core."""

from userapi.infrastructure.database.engine import create_db_engine, init_database
from userapi.infrastructure.database.schema import metadata, users

__all__ = [
    "create_db_engine",
    "init_database",
    "metadata",
    "users",
]
