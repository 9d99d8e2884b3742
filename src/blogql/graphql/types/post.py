"""
Post GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated

import strawberry

if TYPE_CHECKING:
    from ...storage.base import PostRecord
    from .user import User


@strawberry.type
class Post:
    """Post type for GraphQL API."""

    id: strawberry.ID
    title: str
    content: str
    summary: str | None
    published: bool
    created_at: datetime
    updated_at: datetime | None
    author_id: int

    @strawberry.field
    async def author(self, info: strawberry.Info) -> Annotated["User", strawberry.lazy(".user")]:
        """Get the author of this post."""
        from ..resolvers.post import resolve_post_author

        return await resolve_post_author(self, info)


def post_from_record(record: "PostRecord") -> Post:
    return Post(
        id=strawberry.ID(str(record.id)),
        title=record.title,
        content=record.content,
        summary=record.summary,
        published=record.published,
        created_at=record.created_at,
        updated_at=record.updated_at,
        author_id=record.author_id,
    )
