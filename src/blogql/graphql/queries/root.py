"""
Root GraphQL query definitions
"""

import strawberry

from ..types.connection import PostConnection
from ..types.post import Post
from ..types.user import User

GREETING = "Hello, GraphQL!"


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    def hello(self) -> str | None:
        """Connectivity check."""
        return GREETING

    @strawberry.field
    async def users(self, info: strawberry.Info) -> list[User]:
        """Get all users."""
        from ..resolvers.user import resolve_users

        return await resolve_users(info)

    @strawberry.field
    async def user(self, info: strawberry.Info, id: strawberry.ID) -> User | None:
        """Get a user by ID."""
        from ..resolvers.user import resolve_user_by_id

        return await resolve_user_by_id(info, id)

    @strawberry.field
    async def me(self, info: strawberry.Info) -> User | None:
        """Get the current authenticated user."""
        from ..resolvers.user import resolve_current_user

        return await resolve_current_user(info)

    @strawberry.field
    async def posts(self, info: strawberry.Info, published: bool | None = None) -> list[Post]:
        """Get posts, optionally filtered by published state."""
        from ..resolvers.post import resolve_posts

        return await resolve_posts(info, published)

    @strawberry.field
    async def post(self, info: strawberry.Info, id: strawberry.ID) -> Post | None:
        """Get a post by ID."""
        from ..resolvers.post import resolve_post_by_id

        return await resolve_post_by_id(info, id)

    @strawberry.field
    async def posts_connection(
        self,
        info: strawberry.Info,
        first: int | None = 10,
        after: str | None = None,
        published: bool | None = None,
    ) -> PostConnection:
        """Page through posts in id order using an opaque cursor."""
        from ..resolvers.post import resolve_posts_connection

        return await resolve_posts_connection(info, first, after, published)
