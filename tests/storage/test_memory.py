"""
Tests for the in-memory repository
"""

import pytest

from blogql.storage import IntegrityViolation, MemoryBlogRepository, create_repository
from blogql.storage.sql import SqlBlogRepository


@pytest.mark.asyncio
async def test_ids_increment_and_are_not_reused(repository):
    author = await repository.create_user("A", "a@example.com", "hash")
    first = await repository.create_post(title="1", content="c", author_id=author.id)
    await repository.delete_post(first.id)
    second = await repository.create_post(title="2", content="c", author_id=author.id)

    assert (first.id, second.id) == (1, 2)


@pytest.mark.asyncio
async def test_duplicate_email_violates_integrity(repository):
    await repository.create_user("A", "a@example.com", "hash")

    with pytest.raises(IntegrityViolation):
        await repository.create_user("B", "a@example.com", "hash")


@pytest.mark.asyncio
async def test_post_requires_existing_author(repository):
    with pytest.raises(IntegrityViolation):
        await repository.create_post(title="t", content="c", author_id=1)


@pytest.mark.asyncio
async def test_returned_records_are_copies(seeded_repository):
    post = await seeded_repository.get_post(1)
    post.title = "Mutated"

    assert (await seeded_repository.get_post(1)).title == "Introduction à GraphQL"


@pytest.mark.asyncio
async def test_update_post_sets_updated_at(seeded_repository):
    updated = await seeded_repository.update_post(1, {"title": "New"})

    assert updated.title == "New"
    assert updated.updated_at is not None
    assert updated.content == "GraphQL est un langage de requête pour les API..."


@pytest.mark.asyncio
async def test_update_missing_post_returns_none(repository):
    assert await repository.update_post(5, {"title": "x"}) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("changes", [{"author_id": 2}, {"title": None}, {"published": None}])
async def test_update_rejects_invalid_changes(seeded_repository, changes):
    with pytest.raises(ValueError):
        await seeded_repository.update_post(1, changes)


@pytest.mark.asyncio
async def test_delete_returns_removed_post(seeded_repository):
    deleted = await seeded_repository.delete_post(3)

    assert deleted.id == 3
    assert await seeded_repository.delete_post(3) is None
    assert [post.id for post in await seeded_repository.list_posts()] == [1, 2]


@pytest.mark.asyncio
async def test_list_posts_after(seeded_repository):
    rows = await seeded_repository.list_posts_after(1, 5)
    published = await seeded_repository.list_posts_after(None, 5, published=True)
    limited = await seeded_repository.list_posts_after(None, 1)

    assert [post.id for post in rows] == [2, 3]
    assert [post.id for post in published] == [1, 2]
    assert [post.id for post in limited] == [1]


@pytest.mark.asyncio
async def test_lookups(seeded_repository):
    assert (await seeded_repository.get_user_by_email("test@example.com")).id == 2
    assert await seeded_repository.get_user_by_email("missing@example.com") is None
    assert [u.id for u in await seeded_repository.get_users_by_ids([2, 7])] == [2]
    assert await seeded_repository.count_users() == 2


@pytest.mark.asyncio
async def test_clear_removes_everything(seeded_repository):
    await seeded_repository.clear()

    assert await seeded_repository.list_users() == []
    assert await seeded_repository.list_posts() == []


def test_create_repository():
    assert isinstance(create_repository("memory"), MemoryBlogRepository)
    assert isinstance(create_repository("database"), SqlBlogRepository)

    with pytest.raises(ValueError, match="Unsupported storage backend"):
        create_repository("sqlite")
