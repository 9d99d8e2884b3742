"""Repository interface and the plain records it returns."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

# Ids are PostgreSQL SERIAL (int4) columns
MAX_ID = 2**31 - 1

# Columns updatePost may change
POST_UPDATABLE_FIELDS = frozenset({"title", "content", "summary", "published"})


@dataclass
class UserRecord:
    id: int
    name: str
    email: str
    password: str
    created_at: datetime


@dataclass
class PostRecord:
    id: int
    title: str
    content: str
    summary: str | None
    published: bool
    author_id: int
    created_at: datetime
    updated_at: datetime | None = None


class StorageError(Exception):
    """Base class for storage failures."""


class IntegrityViolation(StorageError):
    """Raised when a write would break a relational constraint."""


class BlogRepository(Protocol):
    """Data access for users and posts.

    Lookups return ``None`` for missing rows rather than raising; callers decide
    whether a miss is an error.
    """

    async def list_users(self) -> list[UserRecord]: ...

    async def get_user(self, user_id: int) -> UserRecord | None: ...

    async def get_user_by_email(self, email: str) -> UserRecord | None: ...

    async def get_users_by_ids(self, user_ids: Iterable[int]) -> list[UserRecord]: ...

    async def count_users(self) -> int: ...

    async def create_user(self, name: str, email: str, password_hash: str) -> UserRecord: ...

    async def list_posts(self, published: bool | None = None) -> list[PostRecord]: ...

    async def get_post(self, post_id: int) -> PostRecord | None: ...

    async def list_posts_by_author_ids(self, author_ids: Iterable[int]) -> list[PostRecord]: ...

    async def list_posts_after(
        self, after_id: int | None, limit: int, published: bool | None = None
    ) -> list[PostRecord]: ...

    async def create_post(
        self,
        title: str,
        content: str,
        author_id: int,
        summary: str | None = None,
        published: bool = False,
    ) -> PostRecord: ...

    async def update_post(self, post_id: int, changes: Mapping[str, Any]) -> PostRecord | None: ...

    async def delete_post(self, post_id: int) -> PostRecord | None: ...

    async def clear(self) -> None: ...


def validate_post_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Reject unknown columns and nulls for required columns."""
    unknown = set(changes) - POST_UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update post fields: {', '.join(sorted(unknown))}")
    for field in ("title", "content", "published"):
        if field in changes and changes[field] is None:
            raise ValueError(f"Post field '{field}' cannot be null")
    return dict(changes)
