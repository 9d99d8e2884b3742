"""
Middleware for request context and logging
"""

import json
import re
from collections.abc import Callable, Iterable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .logging import get_logger, request_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

SENSITIVE_KEYS = {
    "password",
    "token",
    "secret",
    "auth",
    "authorization",
    "access_token",
    "key",
    "jwt",
    "session",
    "cookie",
    "credentials",
}

_OPERATION_RE = re.compile(r"\b(query|mutation)\s+(\w+)")


def sanitize_query_params(params: dict[str, Any]) -> dict[str, Any]:
    """Redact query parameters whose name contains a sensitive keyword."""
    sanitized = {}
    for key, value in params.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            sanitized[key] = "[REDACTED]"
        else:
            sanitized[key] = value
    return sanitized


def operation_name_from_payload(payload: dict[str, Any]) -> str | None:
    """Derive a loggable operation name from a GraphQL request payload."""
    op = payload.get("operationName")
    if isinstance(op, str) and op:
        return op

    q = payload.get("query", "")
    if not isinstance(q, str) or not q:
        return None
    if "__schema" in q or "IntrospectionQuery" in q:
        return "__introspection"

    match = _OPERATION_RE.search(q)
    if match:
        kind = "mutation:" if match.group(1) == "mutation" else ""
        return f"{kind}{match.group(2)}"
    return "unnamed_operation"


async def extract_graphql_operation_name(request: Request, graphql_paths: set[str]) -> str | None:
    if request.url.path not in graphql_paths:
        return None

    if request.method == "GET":
        return operation_name_from_payload(dict(request.query_params))

    if request.method == "POST":
        try:
            body = await request.body()
            if not body:
                return None
            data = json.loads(body)
            if not isinstance(data, dict):
                return None
            return operation_name_from_payload(data)
        except (json.JSONDecodeError, TypeError, UnicodeDecodeError):
            return None

    return None


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Middleware to set logging context for each request."""

    def __init__(self, app: ASGIApp, graphql_paths: Iterable[str] = ("/graphql",)) -> None:
        super().__init__(app)
        self.graphql_paths = set(graphql_paths)

    def _loggable_params(self, request: Request) -> dict[str, Any] | None:
        if not request.query_params:
            return None
        params = sanitize_query_params(dict(request.query_params))
        # GraphQL GET requests carry the whole document in the query string
        if request.url.path in self.graphql_paths:
            for k in ("query", "variables", "extensions"):
                if k in params:
                    params[k] = "[REDACTED]"
        return params

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        operation = await extract_graphql_operation_name(request, self.graphql_paths)

        with request_context(operation=operation) as request_id:
            logger.info(
                "Request started",
                method=request.method,
                path=request.url.path,
                query_params=self._loggable_params(request),
                user_agent=request.headers.get("user-agent"),
                remote_addr=request.client.host if request.client else None,
            )
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "Request failed", method=request.method, path=request.url.path, error=str(e)
                )
                raise

            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "Request completed",
                status_code=response.status_code,
                method=request.method,
                path=request.url.path,
            )
            return response
