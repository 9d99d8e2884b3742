"""
Alembic migrations for the users and posts tables.

The Alembic config is built here rather than read as-is from ``alembic.ini``
so migrations always target the database configured through ``Settings``.
"""

from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory

from ..config import get_async_database_url, settings
from ..logging import get_logger

logger = get_logger(__name__)

PROJECT_DIR = Path(__file__).resolve().parents[3]


def get_alembic_config(database_url: str | None = None) -> Config:
    alembic_ini = PROJECT_DIR / "alembic.ini"
    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(PROJECT_DIR / "alembic"))
    url = get_async_database_url(database_url or settings.database_url)
    # ConfigParser interpolation: a literal % must be doubled
    config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return config


def head_revision(config: Config | None = None) -> str | None:
    """Latest revision among the migration scripts (no database access)."""
    script = ScriptDirectory.from_config(config or get_alembic_config())
    return script.get_current_head()


def upgrade(revision: str = "head", database_url: str | None = None) -> None:
    config = get_alembic_config(database_url)
    logger.info("Upgrading database", revision=revision)
    command.upgrade(config, revision)
    logger.info("Database upgrade completed", revision=revision)


def downgrade(revision: str = "-1", database_url: str | None = None) -> None:
    config = get_alembic_config(database_url)
    logger.info("Downgrading database", revision=revision)
    command.downgrade(config, revision)
    logger.info("Database downgrade completed", revision=revision)


def create_revision(message: str, autogenerate: bool = True) -> None:
    """Write a new migration script, diffing against ``blogql.dbmodels`` when autogenerating."""
    config = get_alembic_config()
    logger.info("Creating migration", message=message, autogenerate=autogenerate)
    command.revision(config, message=message, autogenerate=autogenerate)


def show_current(verbose: bool = False, database_url: str | None = None) -> None:
    command.current(get_alembic_config(database_url), verbose=verbose)


def show_history() -> None:
    command.history(get_alembic_config())
