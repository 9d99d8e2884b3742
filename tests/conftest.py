"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import Generator
from typing import Any

import pytest
import pytest_asyncio

from blogql.auth.adapters.jwt import JWTAuthAdapter
from blogql.config import Settings
from blogql.database.seed_data import seed_demo_data
from blogql.graphql.context import build_context
from blogql.graphql.schema import schema
from blogql.storage.memory import MemoryBlogRepository

TEST_JWT_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an isolated in-memory server."""
    return Settings(
        storage_backend="memory",
        auth_provider="jwt",
        jwt_secret=TEST_JWT_SECRET,
        require_auth=False,
        debug=True,
        default_page_size=10,
        max_page_size=50,
    )


@pytest.fixture
def jwt_adapter() -> JWTAuthAdapter:
    return JWTAuthAdapter(secret_key=TEST_JWT_SECRET)


@pytest.fixture
def repository() -> MemoryBlogRepository:
    return MemoryBlogRepository()


@pytest_asyncio.fixture
async def seeded_repository() -> MemoryBlogRepository:
    """Repository holding the two demo users and three demo posts."""
    repository = MemoryBlogRepository()
    await seed_demo_data(repository)
    return repository


@pytest.fixture
def execute(test_settings: Settings, jwt_adapter: JWTAuthAdapter):
    """Return a coroutine that runs an operation against the main schema."""

    async def _execute(
        repository: MemoryBlogRepository,
        query: str,
        variables: dict[str, Any] | None = None,
        **context_overrides: Any,
    ):
        context_overrides.setdefault("settings", test_settings)
        context_overrides.setdefault("auth_adapter", jwt_adapter)
        context = build_context(repository, **context_overrides)
        return await schema.execute(query, variable_values=variables, context_value=context)

    return _execute


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
