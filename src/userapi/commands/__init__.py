"""Subcommand modules for userapi.

Provides register_commands() which uses deferred imports to keep
``userapi --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``users`` group and the standalone commands on the root group."""
    from userapi.commands.init_db import init_db
    from userapi.commands.serve import serve
    from userapi.commands.users import users

    cli.add_command(users)
    cli.add_command(serve)
    cli.add_command(init_db)
