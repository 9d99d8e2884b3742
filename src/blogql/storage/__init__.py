"""
Storage backends for users and posts
"""

from .base import (
    BlogRepository,
    IntegrityViolation,
    PostRecord,
    StorageError,
    UserRecord,
)
from .memory import MemoryBlogRepository


def create_repository(backend: str) -> BlogRepository:
    """Create the repository for the configured storage backend."""
    if backend == "memory":
        return MemoryBlogRepository()

    elif backend == "database":
        from .sql import SqlBlogRepository

        return SqlBlogRepository()

    else:
        raise ValueError(f"Unsupported storage backend: {backend}")


__all__ = [
    "BlogRepository",
    "IntegrityViolation",
    "MemoryBlogRepository",
    "PostRecord",
    "StorageError",
    "UserRecord",
    "create_repository",
]
