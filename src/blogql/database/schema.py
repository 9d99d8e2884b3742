"""
Table creation for fresh databases
"""

from ..dbmodels import Base
from ..logging import get_logger
from .connection import get_async_engine

logger = get_logger(__name__)


async def create_schema() -> None:
    """Create any missing tables; existing tables are left untouched."""
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    logger.info("Database schema ensured", tables=sorted(Base.metadata.tables))
