from collections import defaultdict
from functools import partial

from strawberry.dataloader import DataLoader

from ..storage.base import BlogRepository, PostRecord, UserRecord


async def load_users(repository: BlogRepository, keys: list[int]) -> list[UserRecord | None]:
    """Batch load users by ID."""
    users = await repository.get_users_by_ids(keys)
    users_map = {user.id: user for user in users}
    return [users_map.get(key) for key in keys]


async def load_posts_by_author(
    repository: BlogRepository, keys: list[int]
) -> list[list[PostRecord]]:
    """Batch load each author's posts, ordered by post ID."""
    posts = await repository.list_posts_by_author_ids(keys)
    posts_map: dict[int, list[PostRecord]] = defaultdict(list)
    for post in sorted(posts, key=lambda p: p.id):
        posts_map[post.author_id].append(post)
    return [posts_map.get(key, []) for key in keys]


class Loaders:
    """Per-request DataLoaders; a fresh instance must be built for every request."""

    def __init__(self, repository: BlogRepository):
        self.user_loader = DataLoader(load_fn=partial(load_users, repository))
        self.posts_by_author_loader = DataLoader(load_fn=partial(load_posts_by_author, repository))

    def forget_author_posts(self, author_id: int) -> None:
        """Drop cached posts for an author after a write touching them."""
        loader = self.posts_by_author_loader
        if loader.cache_map.get(author_id) is not None:
            loader.clear(author_id)
