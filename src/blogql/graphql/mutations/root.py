"""
Root GraphQL mutation definitions
"""

from typing import Any

import strawberry

from ..types.post import Post
from ..types.user import AuthPayload, User


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="createUser")
    async def create_user(
        self, info: strawberry.Info, name: str, email: str, password: str
    ) -> User:
        """Register a new user."""
        from ..resolvers.user import create_user

        return await create_user(info, name, email, password)

    @strawberry.mutation
    async def login(self, info: strawberry.Info, email: str, password: str) -> AuthPayload:
        """Exchange credentials for a bearer token."""
        from ..resolvers.auth import login

        return await login(info, email, password)

    # Post mutations
    @strawberry.mutation(name="createPost")
    async def create_post(
        self,
        info: strawberry.Info,
        title: str,
        content: str,
        author_id: int,
        summary: str | None = None,
        published: bool | None = False,
    ) -> Post:
        """Create a new post."""
        from ..resolvers.post import create_post

        return await create_post(
            info,
            title=title,
            content=content,
            author_id=author_id,
            summary=summary,
            published=bool(published),
        )

    @strawberry.mutation(name="updatePost")
    async def update_post(
        self,
        info: strawberry.Info,
        id: strawberry.ID,
        title: str | None = strawberry.UNSET,
        content: str | None = strawberry.UNSET,
        summary: str | None = strawberry.UNSET,
        published: bool | None = strawberry.UNSET,
    ) -> Post:
        """Update the provided fields of a post; a null summary clears it."""
        from ..resolvers.post import update_post

        changes: dict[str, Any] = {}
        for field, value in (("title", title), ("content", content), ("published", published)):
            if value is not strawberry.UNSET and value is not None:
                changes[field] = value
        if summary is not strawberry.UNSET:
            changes["summary"] = summary

        return await update_post(info, id, changes)

    @strawberry.mutation(name="deletePost")
    async def delete_post(self, info: strawberry.Info, id: strawberry.ID) -> Post | None:
        """Delete a post and return it, or null if it did not exist."""
        from ..resolvers.post import delete_post

        return await delete_post(info, id)
