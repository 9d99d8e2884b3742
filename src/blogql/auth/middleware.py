"""Resolve the authentication context of an incoming request."""

from __future__ import annotations

from ..logging import get_logger, user_id_ctx
from .adapters.base import AuthAdapter, AuthenticationError
from .context import ANONYMOUS, AuthContext

logger = get_logger(__name__)


def _subject_to_user_id(subject: str) -> int | None:
    return int(subject) if subject.isdigit() else None


async def resolve_auth_context(authorization: str | None, adapter: AuthAdapter) -> AuthContext:
    """
    Turn an ``Authorization: Bearer <token>`` header into an AuthContext.

    Missing, malformed or rejected tokens produce an anonymous context; the
    GraphQL layer decides whether anonymity is acceptable for an operation.
    In no-auth mode a missing header is treated as the development user.
    """
    if not authorization:
        if hasattr(adapter, "default_user_id"):
            authorization = "Bearer dev-token"
        else:
            return ANONYMOUS

    if not authorization.startswith("Bearer "):
        logger.warning("Invalid authorization format received")
        return ANONYMOUS

    token = authorization[7:].strip()
    if not token:
        logger.warning("Empty token provided")
        return ANONYMOUS

    try:
        principal = await adapter.verify_token(token)
    except AuthenticationError as e:
        logger.warning("Authentication failed", error=str(e))
        return ANONYMOUS

    user_id = _subject_to_user_id(principal["subject"])
    user_id_ctx.set(principal["subject"])
    logger.debug(
        "Request authenticated",
        provider=principal["provider"],
        subject=principal["subject"],
    )
    return AuthContext(user_id=user_id, principal=principal, token=token)
