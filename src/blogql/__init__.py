"""
blogql
GraphQL demonstration server: users, posts, DataLoaders and cursor pagination
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
