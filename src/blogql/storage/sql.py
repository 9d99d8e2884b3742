"""SQLAlchemy-backed repository."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from contextlib import AbstractAsyncContextManager
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.connection import get_async_session
from ..dbmodels import Posts, Users
from ..logging import get_logger
from .base import IntegrityViolation, PostRecord, UserRecord, validate_post_changes

logger = get_logger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


def user_record(user: Users) -> UserRecord:
    return UserRecord(
        id=user.id,
        name=user.name,
        email=user.email,
        password=user.password,
        created_at=user.created_at,
    )


def post_record(post: Posts) -> PostRecord:
    return PostRecord(
        id=post.id,
        title=post.title,
        content=post.content,
        summary=post.summary,
        published=post.published,
        author_id=post.author_id,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


class SqlBlogRepository:
    """Repository over the shared async connection pool.

    Each call checks out a session for its own duration and converts rows to
    records before the session closes.
    """

    def __init__(self, session_factory: SessionFactory | None = None) -> None:
        self._session_factory = session_factory or get_async_session

    # Users

    async def list_users(self) -> list[UserRecord]:
        async with self._session_factory() as session:
            result = await session.execute(select(Users).order_by(Users.id))
            return [user_record(user) for user in result.scalars().all()]

    async def get_user(self, user_id: int) -> UserRecord | None:
        async with self._session_factory() as session:
            result = await session.execute(select(Users).where(Users.id == user_id))
            user = result.scalar_one_or_none()
            return user_record(user) if user else None

    async def get_user_by_email(self, email: str) -> UserRecord | None:
        async with self._session_factory() as session:
            result = await session.execute(select(Users).where(Users.email == email))
            user = result.scalar_one_or_none()
            return user_record(user) if user else None

    async def get_users_by_ids(self, user_ids: Iterable[int]) -> list[UserRecord]:
        ids = list(user_ids)
        if not ids:
            return []
        async with self._session_factory() as session:
            result = await session.execute(select(Users).where(Users.id.in_(ids)))
            return [user_record(user) for user in result.scalars().all()]

    async def count_users(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(select(func.count()).select_from(Users))
            return int(result.scalar_one())

    async def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        try:
            async with self._session_factory() as session:
                user = Users(name=name, email=email, password=password_hash)
                session.add(user)
                await session.flush()
                await session.refresh(user)
                record = user_record(user)
        except IntegrityError as e:
            logger.warning("User insert violated a constraint", email=email, error=str(e.orig))
            raise IntegrityViolation(f"Email already registered: {email}") from e
        logger.info("User created", user_id=record.id)
        return record

    # Posts

    async def list_posts(self, published: bool | None = None) -> list[PostRecord]:
        stmt = select(Posts).order_by(Posts.id)
        if published is not None:
            stmt = stmt.where(Posts.published == published)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [post_record(post) for post in result.scalars().all()]

    async def get_post(self, post_id: int) -> PostRecord | None:
        async with self._session_factory() as session:
            result = await session.execute(select(Posts).where(Posts.id == post_id))
            post = result.scalar_one_or_none()
            return post_record(post) if post else None

    async def list_posts_by_author_ids(self, author_ids: Iterable[int]) -> list[PostRecord]:
        ids = list(author_ids)
        if not ids:
            return []
        async with self._session_factory() as session:
            result = await session.execute(
                select(Posts).where(Posts.author_id.in_(ids)).order_by(Posts.id)
            )
            return [post_record(post) for post in result.scalars().all()]

    async def list_posts_after(
        self, after_id: int | None, limit: int, published: bool | None = None
    ) -> list[PostRecord]:
        stmt = select(Posts).order_by(Posts.id).limit(limit)
        if after_id is not None:
            stmt = stmt.where(Posts.id > after_id)
        if published is not None:
            stmt = stmt.where(Posts.published == published)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [post_record(post) for post in result.scalars().all()]

    async def create_post(
        self,
        title: str,
        content: str,
        author_id: int,
        summary: str | None = None,
        published: bool = False,
    ) -> PostRecord:
        try:
            async with self._session_factory() as session:
                post = Posts(
                    title=title,
                    content=content,
                    summary=summary,
                    published=published,
                    author_id=author_id,
                )
                session.add(post)
                await session.flush()
                await session.refresh(post)
                record = post_record(post)
        except IntegrityError as e:
            logger.warning("Post insert violated a constraint", author_id=author_id)
            raise IntegrityViolation(f"Author {author_id} does not exist") from e
        logger.info("Post created", post_id=record.id, author_id=author_id)
        return record

    async def update_post(self, post_id: int, changes: Mapping[str, Any]) -> PostRecord | None:
        values = validate_post_changes(changes)
        async with self._session_factory() as session:
            result = await session.execute(select(Posts).where(Posts.id == post_id))
            post = result.scalar_one_or_none()
            if post is None:
                return None
            for field, value in values.items():
                setattr(post, field, value)
            post.updated_at = datetime.now(UTC)
            await session.flush()
            await session.refresh(post)
            return post_record(post)

    async def delete_post(self, post_id: int) -> PostRecord | None:
        async with self._session_factory() as session:
            result = await session.execute(select(Posts).where(Posts.id == post_id))
            post = result.scalar_one_or_none()
            if post is None:
                return None
            record = post_record(post)
            await session.delete(post)
            return record

    async def clear(self) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(Posts))
            await session.execute(delete(Users))
        logger.info("All users and posts deleted")
