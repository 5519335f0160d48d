"""structlog configuration for userapi.

Two output modes:
- Human (default): colored console output to stderr
- JSON (--log-json): Structured JSON lines to stderr

Configuration is explicit: the process entry point calls
:func:`configure_logging` at start and :func:`shutdown_logging` at stop.
Components never configure logging themselves; they receive a logger
at construction.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Marker attribute on the handler we install, so teardown only removes ours.
_HANDLER_MARKER = "_userapi_handler"


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    level: int = logging.WARNING,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output. Overrides *level*.
        log_json: Use JSON renderer instead of console renderer.
        level: Level for ``userapi`` loggers when not verbose. One-shot CLI
            commands keep the WARNING default; the server runs at INFO.
    """
    app_level = logging.DEBUG if verbose else level

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderers: list[structlog.types.Processor]
    if log_json:
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *renderers,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_MARKER, True)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("userapi").setLevel(app_level)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


def shutdown_logging() -> None:
    """Flush and detach the handler installed by :func:`configure_logging`."""
    structlog.contextvars.clear_contextvars()
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            handler.flush()
            root_logger.removeHandler(handler)
            handler.close()
