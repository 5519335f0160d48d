"""Repository for the ``users`` table.

Zero rows returned or affected surface as :class:`NotFoundError`;
any driver or SQLAlchemy failure surfaces as :class:`PersistenceError`
with the original exception chained.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from userapi.domain.errors import NotFoundError, PersistenceError
from userapi.domain.users import UserRecord, format_date, parse_date
from userapi.infrastructure.database.schema import users

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine, RowMapping


class UserRepository:
    """Encapsulates SQL for user create/read/update/delete."""

    def __init__(
        self, engine: Engine, *, logger: structlog.stdlib.BoundLogger | None = None
    ) -> None:
        self._engine = engine
        self._log = logger or structlog.get_logger(__name__)

    def insert(self, name: str, date_of_birth: str) -> int:
        """Insert a user and return the store-assigned id."""
        dob = _to_storage_date(date_of_birth)
        with self._storage_errors("insert"), self._engine.begin() as conn:
            result = conn.execute(insert(users).values(name=name, dob=dob))
            return int(result.inserted_primary_key[0])

    def find_by_id(self, user_id: int) -> UserRecord:
        stmt = select(users).where(users.c.id == user_id).limit(1)
        with self._storage_errors("find_by_id"), self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            raise NotFoundError(user_id)
        return _to_record(row)

    def find_page(self, offset: int, limit: int) -> tuple[list[UserRecord], int]:
        """Return one ``id``-ordered slice of users and the total row count."""
        count_stmt = select(func.count(users.c.id))
        page_stmt = select(users).order_by(users.c.id).limit(limit).offset(offset)
        with self._storage_errors("find_page"), self._engine.connect() as conn:
            total = int(conn.execute(count_stmt).scalar_one() or 0)
            rows = conn.execute(page_stmt).mappings().all()
        return [_to_record(row) for row in rows], total

    def update(self, user_id: int, name: str, date_of_birth: str) -> None:
        """Replace ``name`` and ``dob``. Raises NotFoundError if no row matched."""
        dob = _to_storage_date(date_of_birth)
        stmt = update(users).where(users.c.id == user_id).values(name=name, dob=dob)
        with self._storage_errors("update"), self._engine.begin() as conn:
            result = conn.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError(user_id)

    def delete(self, user_id: int) -> None:
        stmt = delete(users).where(users.c.id == user_id)
        with self._storage_errors("delete"), self._engine.begin() as conn:
            result = conn.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError(user_id)

    @contextmanager
    def _storage_errors(self, op: str) -> Iterator[None]:
        try:
            yield
        except (SQLAlchemyError, OverflowError) as exc:
            self._log.error("storage_failure", op=op, exc_info=True)
            msg = f"{op} failed: {exc.__class__.__name__}"
            raise PersistenceError(msg) from exc


# ---------------------------------------------------------------------------
# Storage-edge conversions
# ---------------------------------------------------------------------------


def _to_storage_date(value: str) -> date:
    try:
        return parse_date(value)
    except ValueError as exc:
        raise PersistenceError(str(exc)) from exc


def _from_storage_date(value: Any) -> str:
    """Normalize a ``dob`` column value to ``YYYY-MM-DD``.

    Drivers return :class:`date`, :class:`datetime`, or a plain string
    depending on the backend.
    """
    if isinstance(value, datetime):
        return format_date(value.date())
    if isinstance(value, date):
        return format_date(value)
    try:
        return format_date(parse_date(str(value)))
    except ValueError as exc:
        msg = f"Stored date of birth is not YYYY-MM-DD: {value!r}"
        raise PersistenceError(msg) from exc


def _to_record(row: RowMapping) -> UserRecord:
    return UserRecord(
        id=int(row["id"]),
        name=str(row["name"]),
        date_of_birth=_from_storage_date(row["dob"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
