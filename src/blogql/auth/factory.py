"""Factory for creating auth adapters based on configuration."""

from __future__ import annotations

from ..config import Settings, settings as default_settings
from .adapters.base import AuthAdapter
from .adapters.jwt import JWTAuthAdapter
from .adapters.none import NoAuthAdapter


def get_auth_adapter(settings: Settings | None = None) -> AuthAdapter:
    """Create and return the configured auth adapter."""
    settings = settings or default_settings
    provider = settings.auth_provider

    if provider == "none":
        return NoAuthAdapter(environment=settings.environment)

    elif provider == "jwt":
        if not settings.jwt_secret:
            raise ValueError("JWT secret key is required. Set BLOGQL_JWT_SECRET.")

        return JWTAuthAdapter(
            secret_key=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            token_expiry_hours=settings.token_expiry_hours,
        )

    else:
        raise ValueError(f"Unsupported auth provider: {provider}")
