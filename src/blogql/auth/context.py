"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass

from .adapters.base import Principal


@dataclass
class AuthContext:
    """Runtime authentication context for a request."""

    user_id: int | None
    principal: Principal | None
    token: str | None

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None

    @property
    def provider(self) -> str | None:
        return self.principal["provider"] if self.principal else None


ANONYMOUS = AuthContext(user_id=None, principal=None, token=None)
