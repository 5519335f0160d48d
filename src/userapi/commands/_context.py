"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Owns the process logging lifecycle, lazily builds
the engine and service, and centralizes result emission.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from userapi.config.logging import configure_logging, shutdown_logging
from userapi.output.formatters import format_result

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from userapi.config.settings import UserApiSettings
    from userapi.services.result import ServiceResult
    from userapi.services.users import UserService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The database is opened lazily on first use so ``--help`` and
    ``--version`` never touch it.
    """

    def __init__(self, settings: UserApiSettings) -> None:
        self.settings = settings
        self._engine: Engine | None = None
        self._service: UserService | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            from userapi.infrastructure.database.engine import init_database

            self._engine = init_database(
                self.settings.database_url, echo=self.settings.database.echo
            )
        return self._engine

    @property
    def service(self) -> UserService:
        """The user service bound to this invocation's engine."""
        if self._service is None:
            import structlog

            from userapi.infrastructure.repositories import UserRepository
            from userapi.services.users import UserService

            self._service = UserService(
                UserRepository(self.engine, logger=structlog.get_logger("userapi.repository")),
                logger=structlog.get_logger("userapi.services.users"),
            )
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        """Dispose the engine (if opened) and tear down logging."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
        shutdown_logging()
