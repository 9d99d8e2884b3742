"""
Cursor connection types for paginated post listings
"""

import strawberry

from .post import Post


@strawberry.type
class PageInfo:
    has_next_page: bool
    end_cursor: str | None


@strawberry.type
class PostEdge:
    cursor: str
    node: Post


@strawberry.type
class PostConnection:
    """A page of posts ordered by id."""

    edges: list[PostEdge]
    page_info: PageInfo
