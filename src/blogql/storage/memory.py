"""Array-backed repository used for demos, tests and the feed schema."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from ..logging import get_logger
from .base import IntegrityViolation, PostRecord, UserRecord, validate_post_changes

logger = get_logger(__name__)


class MemoryBlogRepository:
    """Keeps users and posts in Python lists, ordered by id.

    Ids are never reused, matching a serial column. Returned records are
    copies so callers cannot mutate stored rows.
    """

    def __init__(self) -> None:
        self._users: list[UserRecord] = []
        self._posts: list[PostRecord] = []
        self._next_user_id = 1
        self._next_post_id = 1
        self._lock = asyncio.Lock()

    # Users

    async def list_users(self) -> list[UserRecord]:
        return [replace(user) for user in self._users]

    async def get_user(self, user_id: int) -> UserRecord | None:
        for user in self._users:
            if user.id == user_id:
                return replace(user)
        return None

    async def get_user_by_email(self, email: str) -> UserRecord | None:
        for user in self._users:
            if user.email == email:
                return replace(user)
        return None

    async def get_users_by_ids(self, user_ids: Iterable[int]) -> list[UserRecord]:
        wanted = set(user_ids)
        return [replace(user) for user in self._users if user.id in wanted]

    async def count_users(self) -> int:
        return len(self._users)

    async def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        async with self._lock:
            if any(user.email == email for user in self._users):
                raise IntegrityViolation(f"Email already registered: {email}")
            user = UserRecord(
                id=self._next_user_id,
                name=name,
                email=email,
                password=password_hash,
                created_at=datetime.now(UTC),
            )
            self._next_user_id += 1
            self._users.append(user)
        logger.debug("User created", user_id=user.id)
        return replace(user)

    # Posts

    async def list_posts(self, published: bool | None = None) -> list[PostRecord]:
        return [
            replace(post)
            for post in self._posts
            if published is None or post.published == published
        ]

    async def get_post(self, post_id: int) -> PostRecord | None:
        for post in self._posts:
            if post.id == post_id:
                return replace(post)
        return None

    async def list_posts_by_author_ids(self, author_ids: Iterable[int]) -> list[PostRecord]:
        wanted = set(author_ids)
        return [replace(post) for post in self._posts if post.author_id in wanted]

    async def list_posts_after(
        self, after_id: int | None, limit: int, published: bool | None = None
    ) -> list[PostRecord]:
        rows = []
        for post in self._posts:
            if len(rows) >= limit:
                break
            if after_id is not None and post.id <= after_id:
                continue
            if published is not None and post.published != published:
                continue
            rows.append(replace(post))
        return rows

    async def create_post(
        self,
        title: str,
        content: str,
        author_id: int,
        summary: str | None = None,
        published: bool = False,
    ) -> PostRecord:
        async with self._lock:
            if not any(user.id == author_id for user in self._users):
                raise IntegrityViolation(f"Author {author_id} does not exist")
            post = PostRecord(
                id=self._next_post_id,
                title=title,
                content=content,
                summary=summary,
                published=published,
                author_id=author_id,
                created_at=datetime.now(UTC),
            )
            self._next_post_id += 1
            self._posts.append(post)
        logger.debug("Post created", post_id=post.id, author_id=author_id)
        return replace(post)

    async def update_post(self, post_id: int, changes: Mapping[str, Any]) -> PostRecord | None:
        changes = validate_post_changes(changes)
        async with self._lock:
            for index, post in enumerate(self._posts):
                if post.id == post_id:
                    updated = replace(post, **changes, updated_at=datetime.now(UTC))
                    self._posts[index] = updated
                    return replace(updated)
        return None

    async def delete_post(self, post_id: int) -> PostRecord | None:
        async with self._lock:
            for index, post in enumerate(self._posts):
                if post.id == post_id:
                    del self._posts[index]
                    return post
        return None

    async def clear(self) -> None:
        async with self._lock:
            self._posts.clear()
            self._users.clear()
