"""No-auth adapter for local development without authentication."""

from __future__ import annotations

from ...logging import get_logger
from .base import AuthenticationError, Principal

logger = get_logger(__name__)


class NoAuthAdapter:
    """
    No-auth adapter that bypasses authentication for local development.

    Any non-empty bearer token is accepted. A token of the form
    ``dev-token|<user id>`` (as issued by :meth:`issue_token`) acts as that
    user; anything else acts as ``default_user_id``.
    WARNING: Only use this in development environments!
    """

    def __init__(self, default_user_id: str = "dev-user", environment: str = "development"):
        if environment.lower() in ("production", "prod"):
            logger.error(
                "NoAuthAdapter detected in production environment!",
                environment=environment,
            )
            raise RuntimeError(
                "NoAuthAdapter cannot be used in production environments. "
                "Please configure the jwt authentication provider."
            )

        self.default_user_id = default_user_id

    async def verify_token(self, token: str) -> Principal:
        if not token:
            raise AuthenticationError("Token required (even in no-auth mode)")

        subject = self.default_user_id
        parts = token.split("|")
        if len(parts) >= 2 and parts[0] == "dev-token" and parts[1]:
            subject = parts[1]

        return Principal(
            provider="none",
            subject=subject,
            display_name="Development User",
            claims={"mode": "development"},
        )

    async def issue_token(self, user_id: int | None = None, claims: dict | None = None) -> str:
        """Issue a fake development token."""
        token_parts = [
            "dev-token",
            str(user_id) if user_id is not None else self.default_user_id,
            "no-auth-mode",
        ]

        if claims:
            token_parts.extend(f"{k}={v}" for k, v in claims.items())

        return "|".join(token_parts)
