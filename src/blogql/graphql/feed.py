"""
Array-backed feed schema

A read-only variant of the post API served from an in-memory list, exposing
posts with ``postID``-style field names.
"""

from datetime import datetime
from typing import Annotated, Any

import strawberry
from fastapi import Request
from strawberry.fastapi import GraphQLRouter

from ..logging import get_logger
from ..storage.base import PostRecord
from .access_control import get_repository, parse_id
from .context import build_context
from .queries.root import GREETING

logger = get_logger(__name__)


@strawberry.type
class FeedPost:
    post_id: strawberry.ID = strawberry.field(name="postID")
    post_title: str
    post_summary: str | None
    post_content: str
    published: bool
    created_at: datetime


def feed_post_from_record(record: PostRecord) -> FeedPost:
    return FeedPost(
        post_id=strawberry.ID(str(record.id)),
        post_title=record.title,
        post_summary=record.summary,
        post_content=record.content,
        published=record.published,
        created_at=record.created_at,
    )


@strawberry.type
class FeedQuery:
    @strawberry.field
    def hello(self) -> str | None:
        return GREETING

    @strawberry.field
    async def feed_posts(
        self, info: strawberry.Info, published: bool | None = None
    ) -> list[FeedPost]:
        """List feed posts, optionally filtered by published state."""
        records = await get_repository(info).list_posts(published=published)
        return [feed_post_from_record(record) for record in records]

    @strawberry.field
    async def feed_post(
        self,
        info: strawberry.Info,
        post_id: Annotated[strawberry.ID, strawberry.argument(name="postID")],
    ) -> FeedPost | None:
        """Get a single feed post by its postID."""
        record = await get_repository(info).get_post(parse_id(post_id, "postID"))
        return feed_post_from_record(record) if record else None


feed_schema = strawberry.Schema(query=FeedQuery)


async def get_feed_context(request: Request) -> dict[str, Any]:
    state = request.app.state
    return build_context(state.feed_repository, settings=state.settings, request=request)


def create_feed_router(path: str = "/feed") -> GraphQLRouter[dict[str, Any], None]:
    """Create the GraphQL router for the feed schema."""
    return GraphQLRouter(
        feed_schema,
        path=path,
        graphql_ide="graphiql",
        context_getter=get_feed_context,
    )
