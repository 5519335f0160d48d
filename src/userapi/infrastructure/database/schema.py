"""SQLAlchemy Core table definitions for the userapi database."""

from __future__ import annotations

from sqlalchemy import Column, Date, DateTime, Integer, MetaData, String, Table, func

from userapi.domain.users import NAME_MAX_LENGTH

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(NAME_MAX_LENGTH), nullable=False),
    Column("dob", Date, nullable=False),
    Column("created_at", DateTime, server_default=func.current_timestamp()),
    Column(
        "updated_at",
        DateTime,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
    ),
)
