"""
structlog configuration and per-request log context.

Every log line emitted while a request is being served carries its request
id, and where known the GraphQL operation name and authenticated user id.
"""

import logging
import secrets
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import structlog

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
operation_ctx: ContextVar[str | None] = ContextVar("graphql_operation", default=None)
# Set by blogql.auth.middleware once a bearer token is verified
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)

_CONTEXT_FIELDS = (
    ("request_id", request_id_ctx),
    ("graphql_operation", operation_ctx),
    ("user_id", user_id_ctx),
)


def add_request_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor copying the request context into the event."""
    for key, var in _CONTEXT_FIELDS:
        value = var.get()
        if value and key not in event_dict:
            event_dict[key] = value
    return event_dict


def configure_logging(debug: bool = False, log_level: str | None = None) -> None:
    """Route structlog through stdlib logging.

    Args:
        debug: Colored console output when True, one JSON object per line otherwise.
        log_level: Level name such as ``"warning"``; defaults to DEBUG in debug
            mode and INFO otherwise.
    """
    if log_level:
        level = getattr(logging, log_level.upper(), logging.INFO)
    else:
        level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(level=level, stream=sys.stdout, format="%(message)s", force=True)
    # LoggingContextMiddleware already logs each request
    logging.getLogger("uvicorn.access").setLevel(max(level, logging.WARNING))

    renderer = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer(ensure_ascii=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_request_context,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """16 hex characters, also returned to clients as ``X-Request-ID``."""
    return secrets.token_hex(8)


@contextmanager
def request_context(
    request_id: str | None = None, operation: str | None = None
) -> Iterator[str]:
    """Bind a request id (generated if absent) and GraphQL operation for the block."""
    request_id = request_id or generate_request_id()
    request_token = request_id_ctx.set(request_id)
    operation_token = operation_ctx.set(operation)
    try:
        yield request_id
    finally:
        operation_ctx.reset(operation_token)
        request_id_ctx.reset(request_token)


def get_request_id() -> str | None:
    return request_id_ctx.get()
