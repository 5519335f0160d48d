"""FastAPI application factory.

``create_app`` wires engine → repository → service once per app and
stores the service on ``app.state``. The engine is disposed when the
app shuts down. Logging configuration is left to the process entry
point (see :mod:`userapi.commands.serve`).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from userapi import __version__
from userapi.api.middleware import install_request_middleware
from userapi.api.routes import health_router, router
from userapi.infrastructure.database.engine import init_database
from userapi.infrastructure.repositories import UserRepository
from userapi.services.users import UserService

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from userapi.config.settings import UserApiSettings


def create_app(settings: UserApiSettings, *, engine: Engine | None = None) -> FastAPI:
    """Build the HTTP app for *settings*.

    Pass *engine* to reuse an existing engine (tests); otherwise one is
    created from ``settings.database_url`` and the table ensured.
    """
    if engine is None:
        engine = init_database(settings.database_url, echo=settings.database.echo)

    log = structlog.get_logger("userapi.api")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("app_started", database=engine.url.render_as_string(hide_password=True))
        yield
        engine.dispose()
        log.info("app_stopped")

    app = FastAPI(title="userapi", version=__version__, lifespan=lifespan)
    app.state.engine = engine
    app.state.user_service = UserService(
        UserRepository(engine, logger=structlog.get_logger("userapi.repository")),
        logger=structlog.get_logger("userapi.services.users"),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_request_middleware(app, log)

    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Report malformed ids and bodies as 400 rather than FastAPI's 422."""
        locations = {err.get("loc", ("",))[0] for err in exc.errors()}
        message = "Invalid user ID" if "path" in locations else "Invalid request body"
        log.warning("bad_request", path=request.url.path, errors=len(exc.errors()))
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})

    app.include_router(health_router)
    app.include_router(router)
    return app
