"""
Reusable seed data functions for database initialization.

Seeding goes through the repository interface, so the same demo content
populates PostgreSQL and the in-memory store.
"""

from __future__ import annotations

from typing import Any

from ..auth.passwords import hash_password
from ..logging import get_logger
from ..storage.base import BlogRepository

logger = get_logger(__name__)

DEMO_USERS: list[dict[str, Any]] = [
    {"name": "Guigui", "email": "guigui@example.com", "password": "password123"},
    {"name": "Test", "email": "test@example.com", "password": "password456"},
]

# author_index points into DEMO_USERS
DEMO_POSTS: list[dict[str, Any]] = [
    {
        "title": "Introduction à GraphQL",
        "content": "GraphQL est un langage de requête pour les API...",
        "summary": "Découvrez les concepts de base de GraphQL et ses avantages.",
        "published": True,
        "author_index": 0,
    },
    {
        "title": "Les avantages de GraphQL par rapport à REST",
        "content": "GraphQL offre plusieurs avantages par rapport aux API REST...",
        "summary": "Analyse comparative des architectures GraphQL et REST.",
        "published": True,
        "author_index": 0,
    },
    {
        "title": "Comment structurer un schéma GraphQL efficace",
        "content": "La conception d'un bon schéma GraphQL est essentielle...",
        "summary": "Meilleures pratiques pour concevoir votre schéma GraphQL.",
        "published": False,
        "author_index": 1,
    },
]


async def seed_demo_data(repository: BlogRepository) -> dict[str, int]:
    """Insert the demo users and posts. Returns counts of created rows."""
    user_ids = []
    for user in DEMO_USERS:
        record = await repository.create_user(
            user["name"], user["email"], hash_password(user["password"])
        )
        user_ids.append(record.id)
        logger.info("Seeded user", user_id=record.id, email=record.email)

    for post in DEMO_POSTS:
        record = await repository.create_post(
            title=post["title"],
            content=post["content"],
            summary=post["summary"],
            published=post["published"],
            author_id=user_ids[post["author_index"]],
        )
        logger.info("Seeded post", post_id=record.id, author_id=record.author_id)

    return {"users": len(user_ids), "posts": len(DEMO_POSTS)}


async def seed_if_empty(repository: BlogRepository) -> bool:
    """
    Seed demo data only when no users exist yet.

    Returns:
        True if data was inserted
    """
    existing = await repository.count_users()
    if existing:
        logger.debug("Skipping seed, users already present", users=existing)
        return False

    counts = await seed_demo_data(repository)
    logger.info("Database seeding completed", **counts)
    return True


async def reset_and_seed(repository: BlogRepository) -> dict[str, int]:
    """Delete every post and user, then insert the demo data."""
    await repository.clear()
    logger.info("Database cleared")
    counts = await seed_demo_data(repository)
    logger.info("Database seeding completed", **counts)
    return counts
