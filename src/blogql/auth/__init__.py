"""Authentication and authorization for blogql."""

from .adapters.base import AuthAdapter, AuthenticationError, Principal
from .context import ANONYMOUS, AuthContext
from .factory import get_auth_adapter
from .middleware import resolve_auth_context
from .passwords import hash_password, verify_password

__all__ = [
    "ANONYMOUS",
    "AuthAdapter",
    "AuthContext",
    "AuthenticationError",
    "Principal",
    "get_auth_adapter",
    "hash_password",
    "resolve_auth_context",
    "verify_password",
]
