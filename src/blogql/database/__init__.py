"""
Database module for blogql
"""

from .connection import dispose_database, get_async_engine, get_async_session, init_database
from .schema import create_schema

__all__ = [
    "create_schema",
    "dispose_database",
    "get_async_engine",
    "get_async_session",
    "init_database",
]
