"""
User GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated

import strawberry

if TYPE_CHECKING:
    from ...storage.base import UserRecord
    from .post import Post


@strawberry.type
class User:
    """User type for GraphQL API."""

    id: strawberry.ID
    name: str
    email: str
    created_at: datetime

    @strawberry.field
    async def posts(
        self, info: strawberry.Info
    ) -> list[Annotated["Post", strawberry.lazy(".post")]]:
        """Get posts written by this user."""
        from ..resolvers.user import resolve_user_posts

        return await resolve_user_posts(self, info)


@strawberry.type
class AuthPayload:
    """Token issued by a successful login."""

    token: str
    user: User


def user_from_record(record: "UserRecord") -> User:
    return User(
        id=strawberry.ID(str(record.id)),
        name=record.name,
        email=record.email,
        created_at=record.created_at,
    )
