"""
Shared context accessors and access checks for GraphQL resolvers
"""

from typing import TYPE_CHECKING

import strawberry

from ..auth.context import ANONYMOUS, AuthContext
from ..logging import get_logger
from ..storage.base import MAX_ID
from .errors import UnauthorizedError, ValidationError

if TYPE_CHECKING:
    from ..config import Settings
    from ..storage.base import BlogRepository, PostRecord
    from .loaders import Loaders

logger = get_logger(__name__)


def get_repository(info: strawberry.Info) -> "BlogRepository":
    return info.context["repository"]


def get_loaders(info: strawberry.Info) -> "Loaders":
    return info.context["loaders"]


def get_settings(info: strawberry.Info) -> "Settings":
    return info.context["settings"]


def get_auth_context(info: strawberry.Info) -> AuthContext:
    return info.context.get("auth") or ANONYMOUS


def parse_id(value: str | int, kind: str = "id") -> int:
    """Convert a GraphQL ``ID`` argument to the integer primary key."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {kind}: {value!r}") from None
    if not 1 <= parsed <= MAX_ID:
        raise ValidationError(f"Invalid {kind}: {value!r}")
    return parsed


def require_write_access(info: strawberry.Info) -> AuthContext:
    """
    Enforce authentication for write operations when ``require_auth`` is on.

    Returns the auth context either way so callers can apply ownership checks.
    """
    auth_context = get_auth_context(info)
    if get_settings(info).require_auth and not auth_context.is_authenticated:
        logger.info("Unauthenticated write rejected")
        raise UnauthorizedError()
    return auth_context


def can_modify_post(post: "PostRecord", auth_context: AuthContext, require_auth: bool) -> bool:
    """
    Check whether the caller may change a post.

    With auth enforcement off everyone may. With it on, the caller must be
    authenticated and, when their identity maps to a user, be the author.
    """
    if not require_auth:
        return True

    if not auth_context.is_authenticated:
        return False

    if auth_context.user_id is None:
        return True

    return post.author_id == auth_context.user_id


def ensure_can_modify_post(info: strawberry.Info, post: "PostRecord") -> None:
    auth_context = require_write_access(info)
    if not can_modify_post(post, auth_context, get_settings(info).require_auth):
        logger.info(
            "Post modification denied",
            post_id=post.id,
            author_id=post.author_id,
            user_id=auth_context.user_id,
        )
        raise UnauthorizedError()
