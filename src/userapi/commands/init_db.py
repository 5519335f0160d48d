"""Command: create the users table (idempotent)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from userapi.commands._base import UserApiCommand
from userapi.services.result import ServiceResult

if TYPE_CHECKING:
    from userapi.commands._context import AppContext


@click.command(
    "init-db",
    cls=UserApiCommand,
    examples="""\
  userapi init-db
  USERAPI_DATABASE__URL=sqlite:////var/lib/userapi/users.db userapi init-db""",
)
@click.pass_obj
def init_db(app: AppContext) -> None:
    """Create the database schema if it does not exist."""
    engine = app.engine
    app.emit(
        ServiceResult.success(
            "init_db",
            {"database": engine.url.render_as_string(hide_password=True)},
        )
    )
