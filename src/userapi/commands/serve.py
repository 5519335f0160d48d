"""serve — run the HTTP API under uvicorn."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from userapi.commands._base import UserApiCommand

if TYPE_CHECKING:
    from userapi.commands._context import AppContext


@click.command(
    cls=UserApiCommand,
    examples="""\
  # Serve on the configured address ([server] in userapi.toml, default 0.0.0.0:8080)
  userapi serve

  # Custom bind address with JSON logs
  userapi --log-json serve --host 127.0.0.1 --port 9000

  # Against MySQL
  USERAPI_DATABASE__URL=mysql+pymysql://app:secret@db/users userapi serve""",
)
@click.option("--host", default=None, help="Bind address (overrides [server] host).")
@click.option("--port", default=None, type=int, help="Listen port (overrides [server] port).")
@click.pass_obj
def serve(app: AppContext, host: str | None, port: int | None) -> None:
    """Start the HTTP server."""
    import logging

    import uvicorn

    from userapi.api.app import create_app
    from userapi.config.logging import configure_logging

    settings = app.settings
    configure_logging(verbose=settings.verbose, log_json=settings.log_json, level=logging.INFO)

    http_app = create_app(settings, engine=app.engine)
    uvicorn.run(
        http_app,
        host=host or settings.server.host,
        port=port or settings.server.port,
        log_config=None,
    )
