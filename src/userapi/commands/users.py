"""Command group: user CRUD against the configured database."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from userapi.commands._base import UserApiGroup
from userapi.domain.users import UserRequest

if TYPE_CHECKING:
    from userapi.commands._context import AppContext

_USERS_EXAMPLES = """\
  userapi users create "Alice" 2000-01-01
  userapi users get 1
  userapi users list
  userapi --json users list --page 2 --page-size 25
  userapi users update 1 "Alice Smith" 2000-01-02
  userapi users delete 1"""


@click.group(cls=UserApiGroup, examples=_USERS_EXAMPLES)
def users() -> None:
    """Create, read, list, update, and delete users."""


@users.command()
@click.argument("name")
@click.argument("date_of_birth")
@click.pass_obj
def create(app: AppContext, name: str, date_of_birth: str) -> None:
    """Create a user. DATE_OF_BIRTH is YYYY-MM-DD."""
    app.emit(app.service.create_user(UserRequest(name=name, date_of_birth=date_of_birth)))


@users.command()
@click.argument("user_id", type=int)
@click.pass_obj
def get(app: AppContext, user_id: int) -> None:
    """Show one user with their age."""
    app.emit(app.service.get_user(user_id))


@users.command("list")
@click.option("--page", type=int, default=None, help="Page number (enables pagination).")
@click.option("--page-size", type=int, default=None, help="Users per page, 1-100.")
@click.pass_obj
def list_cmd(app: AppContext, page: int | None, page_size: int | None) -> None:
    """List users, paginated when --page or --page-size is given."""
    if page is None and page_size is None:
        app.emit(app.service.list_users_simple())
    else:
        app.emit(app.service.list_users_paged(page, page_size))


@users.command()
@click.argument("user_id", type=int)
@click.argument("name")
@click.argument("date_of_birth")
@click.pass_obj
def update(app: AppContext, user_id: int, name: str, date_of_birth: str) -> None:
    """Replace a user's name and date of birth."""
    request = UserRequest(name=name, date_of_birth=date_of_birth)
    app.emit(app.service.update_user(user_id, request))


@users.command()
@click.argument("user_id", type=int)
@click.pass_obj
def delete(app: AppContext, user_id: int) -> None:
    """Delete a user."""
    app.emit(app.service.delete_user(user_id))
