"""
Forward cursor pagination over posts.

Cursors are opaque base64 tokens wrapping the last-seen post id. A page is
fetched with one extra row so ``has_next_page`` can be answered without a
separate count query.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from .storage.base import MAX_ID, BlogRepository, PostRecord

CURSOR_PREFIX = "post:"


class InvalidCursorError(ValueError):
    """Raised when a cursor cannot be decoded."""


@dataclass
class Page:
    rows: list[PostRecord]
    has_next_page: bool
    end_cursor: str | None


def encode_cursor(post_id: int) -> str:
    return base64.b64encode(f"{CURSOR_PREFIX}{post_id}".encode()).decode("ascii")


def decode_cursor(cursor: str) -> int:
    try:
        raw = base64.b64decode(cursor.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise InvalidCursorError(f"Invalid cursor: {cursor!r}") from e

    if not raw.startswith(CURSOR_PREFIX):
        raise InvalidCursorError(f"Invalid cursor: {cursor!r}")
    try:
        post_id = int(raw[len(CURSOR_PREFIX) :])
    except ValueError as e:
        raise InvalidCursorError(f"Invalid cursor: {cursor!r}") from e
    if not 0 <= post_id <= MAX_ID:
        raise InvalidCursorError(f"Invalid cursor: {cursor!r}")
    return post_id


async def paginate_posts(
    repository: BlogRepository,
    first: int,
    after: str | None = None,
    published: bool | None = None,
    max_page_size: int | None = None,
) -> Page:
    """Return at most ``first`` posts with an id greater than the ``after`` cursor."""
    if first < 0:
        raise ValueError("Argument 'first' must be a non-negative integer")
    if max_page_size is not None:
        first = min(first, max_page_size)

    after_id = decode_cursor(after) if after else None
    rows = await repository.list_posts_after(after_id, first + 1, published=published)

    has_next_page = len(rows) > first
    rows = rows[:first]
    end_cursor = encode_cursor(rows[-1].id) if rows else None
    return Page(rows=rows, has_next_page=has_next_page, end_cursor=end_cursor)
