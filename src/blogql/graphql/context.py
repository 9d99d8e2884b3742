"""
GraphQL request context

Resolvers receive everything they need through ``info.context``; nothing in
the resolver layer reaches for module-level connection state.
"""

from typing import Any

from ..auth.adapters.base import AuthAdapter
from ..auth.context import ANONYMOUS, AuthContext
from ..config import Settings, settings as default_settings
from ..storage.base import BlogRepository
from .loaders import Loaders


def build_context(
    repository: BlogRepository,
    *,
    auth: AuthContext = ANONYMOUS,
    auth_adapter: AuthAdapter | None = None,
    settings: Settings | None = None,
    request: Any = None,
) -> dict[str, Any]:
    """Assemble the per-request context dict."""
    return {
        "request": request,
        "repository": repository,
        "loaders": Loaders(repository),
        "auth": auth,
        "auth_adapter": auth_adapter,
        "settings": settings or default_settings,
    }
