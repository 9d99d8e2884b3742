"""
Tests for cursor pagination
"""

import base64

import pytest
import pytest_asyncio

from blogql.pagination import (
    InvalidCursorError,
    decode_cursor,
    encode_cursor,
    paginate_posts,
)
from blogql.storage.memory import MemoryBlogRepository

CONNECTION_QUERY = """
    query Page($first: Int, $after: String, $published: Boolean) {
        postsConnection(first: $first, after: $after, published: $published) {
            edges { cursor node { id } }
            pageInfo { hasNextPage endCursor }
        }
    }
"""


@pytest_asyncio.fixture
async def five_posts():
    repository = MemoryBlogRepository()
    author = await repository.create_user("Author", "author@example.com", "hash")
    for i in range(1, 6):
        await repository.create_post(
            title=f"Post {i}", content="...", author_id=author.id, published=i % 2 == 1
        )
    return repository


class TestCursors:
    def test_cursor_is_opaque_base64(self):
        cursor = encode_cursor(12)

        assert base64.b64decode(cursor) == b"post:12"
        assert decode_cursor(cursor) == 12

    @pytest.mark.parametrize(
        "cursor",
        [
            "not base64!",
            base64.b64encode(b"user:1").decode(),
            base64.b64encode(b"post:abc").decode(),
            base64.b64encode(b"post:-1").decode(),
            base64.b64encode(b"post:2147483648").decode(),
        ],
    )
    def test_invalid_cursors_raise(self, cursor):
        with pytest.raises(InvalidCursorError):
            decode_cursor(cursor)


class TestPaginatePosts:
    @pytest.mark.asyncio
    async def test_walks_all_pages(self, five_posts):
        seen = []
        after = None
        while True:
            page = await paginate_posts(five_posts, 2, after=after)
            seen.extend(row.id for row in page.rows)
            if not page.has_next_page:
                break
            after = page.end_cursor

        assert seen == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_exact_fit_has_no_next_page(self, five_posts):
        page = await paginate_posts(five_posts, 5)

        assert len(page.rows) == 5
        assert page.has_next_page is False
        assert page.end_cursor == encode_cursor(5)

    @pytest.mark.asyncio
    async def test_zero_returns_empty_page(self, five_posts):
        page = await paginate_posts(five_posts, 0)

        assert page.rows == []
        assert page.has_next_page is True
        assert page.end_cursor is None

    @pytest.mark.asyncio
    async def test_negative_first_rejected(self, five_posts):
        with pytest.raises(ValueError):
            await paginate_posts(five_posts, -1)

    @pytest.mark.asyncio
    async def test_page_size_is_clamped(self, five_posts):
        page = await paginate_posts(five_posts, 100, max_page_size=3)

        assert [row.id for row in page.rows] == [1, 2, 3]
        assert page.has_next_page is True

    @pytest.mark.asyncio
    async def test_published_filter(self, five_posts):
        page = await paginate_posts(five_posts, 10, published=True)

        assert [row.id for row in page.rows] == [1, 3, 5]

    @pytest.mark.asyncio
    async def test_cursor_past_end_is_empty(self, five_posts):
        page = await paginate_posts(five_posts, 10, after=encode_cursor(5))

        assert page.rows == []
        assert page.has_next_page is False


class TestPostsConnectionQuery:
    @pytest.mark.asyncio
    async def test_first_page(self, execute, five_posts):
        result = await execute(five_posts, CONNECTION_QUERY, {"first": 2})

        assert result.errors is None
        connection = result.data["postsConnection"]
        assert [edge["node"]["id"] for edge in connection["edges"]] == ["1", "2"]
        assert connection["pageInfo"] == {"hasNextPage": True, "endCursor": encode_cursor(2)}

    @pytest.mark.asyncio
    async def test_next_page_from_cursor(self, execute, five_posts):
        result = await execute(
            five_posts, CONNECTION_QUERY, {"first": 2, "after": encode_cursor(4)}
        )

        connection = result.data["postsConnection"]
        assert [edge["node"]["id"] for edge in connection["edges"]] == ["5"]
        assert connection["pageInfo"]["hasNextPage"] is False

    @pytest.mark.asyncio
    async def test_invalid_cursor_is_user_error(self, execute, five_posts):
        result = await execute(five_posts, CONNECTION_QUERY, {"first": 2, "after": "bogus"})

        assert result.errors is not None
        assert "Invalid cursor" in result.errors[0].message

    @pytest.mark.asyncio
    async def test_negative_first_is_user_error(self, execute, five_posts):
        result = await execute(five_posts, CONNECTION_QUERY, {"first": -1})

        assert "non-negative" in result.errors[0].message
