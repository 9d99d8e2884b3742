from __future__ import annotations

from typing import TYPE_CHECKING, Any

import strawberry

from ...logging import get_logger
from ...pagination import InvalidCursorError, encode_cursor, paginate_posts
from ...storage.base import IntegrityViolation
from ..access_control import (
    ensure_can_modify_post,
    get_loaders,
    get_repository,
    get_settings,
    parse_id,
    require_write_access,
)
from ..errors import NotFoundError, ValidationError
from ..types.connection import PageInfo, PostConnection, PostEdge
from ..types.post import post_from_record
from ..types.user import user_from_record

if TYPE_CHECKING:
    from ..types.post import Post
    from ..types.user import User

logger = get_logger(__name__)


# Query resolvers
async def resolve_posts(info: strawberry.Info, published: bool | None = None) -> list[Post]:
    records = await get_repository(info).list_posts(published=published)
    return [post_from_record(record) for record in records]


async def resolve_post_by_id(info: strawberry.Info, id: str) -> Post | None:
    post_id = parse_id(id)
    record = await get_repository(info).get_post(post_id)
    if record is None:
        logger.info("Post not found", post_id=post_id)
        return None
    return post_from_record(record)


async def resolve_posts_connection(
    info: strawberry.Info,
    first: int | None,
    after: str | None,
    published: bool | None,
) -> PostConnection:
    """Resolve a forward-paginated page of posts."""
    settings = get_settings(info)
    if first is None:
        first = settings.default_page_size

    try:
        page = await paginate_posts(
            get_repository(info),
            first,
            after=after,
            published=published,
            max_page_size=settings.max_page_size,
        )
    except (InvalidCursorError, ValueError) as e:
        raise ValidationError(str(e)) from e

    return PostConnection(
        edges=[
            PostEdge(cursor=encode_cursor(record.id), node=post_from_record(record))
            for record in page.rows
        ],
        page_info=PageInfo(has_next_page=page.has_next_page, end_cursor=page.end_cursor),
    )


# Field resolvers
async def resolve_post_author(post: Post, info: strawberry.Info) -> User:
    record = await get_loaders(info).user_loader.load(post.author_id)
    if record is None:
        raise NotFoundError(f"User {post.author_id} not found")
    return user_from_record(record)


# Mutation resolvers
async def create_post(
    info: strawberry.Info,
    title: str,
    content: str,
    author_id: int,
    summary: str | None = None,
    published: bool = False,
) -> Post:
    require_write_access(info)

    repository = get_repository(info)
    if await get_loaders(info).user_loader.load(author_id) is None:
        raise NotFoundError(f"User {author_id} not found")

    try:
        record = await repository.create_post(
            title=title,
            content=content,
            author_id=author_id,
            summary=summary,
            published=published,
        )
    except IntegrityViolation as e:
        raise NotFoundError(f"User {author_id} not found") from e

    get_loaders(info).forget_author_posts(author_id)
    logger.info("Post created", post_id=record.id, author_id=author_id)
    return post_from_record(record)


async def update_post(info: strawberry.Info, id: str, changes: dict[str, Any]) -> Post:
    """Apply the provided field changes; omitted fields keep their value."""
    post_id = parse_id(id)
    require_write_access(info)
    repository = get_repository(info)

    existing = await repository.get_post(post_id)
    if existing is None:
        raise NotFoundError(f"Post {post_id} not found")
    ensure_can_modify_post(info, existing)

    try:
        record = await repository.update_post(post_id, changes)
    except ValueError as e:
        raise ValidationError(str(e)) from e
    if record is None:
        raise NotFoundError(f"Post {post_id} not found")

    get_loaders(info).forget_author_posts(record.author_id)
    logger.info("Post updated", post_id=post_id, fields=sorted(changes))
    return post_from_record(record)


async def delete_post(info: strawberry.Info, id: str) -> Post | None:
    post_id = parse_id(id)
    require_write_access(info)
    repository = get_repository(info)

    existing = await repository.get_post(post_id)
    if existing is None:
        logger.info("Delete of missing post ignored", post_id=post_id)
        return None
    ensure_can_modify_post(info, existing)

    record = await repository.delete_post(post_id)
    if record is None:
        return None

    get_loaders(info).forget_author_posts(record.author_id)
    logger.info("Post deleted", post_id=post_id)
    return post_from_record(record)
