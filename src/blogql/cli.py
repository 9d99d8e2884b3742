#!/usr/bin/env python3
"""
Main CLI entry point for the blogql server.
"""

import asyncio
import sys

import click

from blogql import __version__
from blogql.config import settings
from blogql.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="blogql")
def cli() -> None:
    """blogql CLI - run the GraphQL server and manage demo data."""
    pass


@cli.command()
@click.option(
    "--host",
    default=settings.api_host,
    help=f"Host to bind to (default: {settings.api_host})",
)
@click.option(
    "--port",
    "ports",
    multiple=True,
    type=int,
    help="Port to try; repeat to give fallbacks in order (default: configured api_ports)",
)
@click.option(
    "--storage",
    type=click.Choice(["database", "memory"]),
    default=None,
    help="Storage backend (default: configured storage_backend)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, ports: tuple[int, ...], storage: str | None, log_level: str) -> None:
    """Start the GraphQL server on the first free port."""
    from blogql.api.app import create_app
    from blogql.server import PortsExhaustedError, run_server

    configure_logging(debug=(log_level == "debug"), log_level=log_level)

    if storage:
        settings.storage_backend = storage

    candidate_ports = list(ports) or settings.api_ports
    logger.info(
        "Starting blogql server",
        host=host,
        ports=candidate_ports,
        storage=settings.storage_backend,
        log_level=log_level,
    )

    try:
        run_server(
            create_app(settings),
            host=host,
            ports=candidate_ports,
            graphql_path=settings.graphql_path,
            log_level=log_level,
        )
    except PortsExhaustedError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.group()
def db() -> None:
    """Manage the PostgreSQL schema and demo data."""
    pass


@db.command("init")
@click.option("--no-seed", is_flag=True, default=False, help="Only create tables")
def init_db(no_seed: bool) -> None:
    """Create missing tables and seed demo data if the database is empty."""
    from blogql.database import create_schema, dispose_database, init_database
    from blogql.database.seed_data import seed_if_empty
    from blogql.storage.sql import SqlBlogRepository

    configure_logging()

    async def do_init() -> bool:
        init_database()
        try:
            await create_schema()
            if no_seed:
                return False
            return await seed_if_empty(SqlBlogRepository())
        finally:
            await dispose_database()

    try:
        seeded = asyncio.run(do_init())
    except Exception as e:
        logger.error("Database initialization failed", error=str(e))
        click.echo(f"✗ Error initializing database: {e}", err=True)
        sys.exit(1)

    click.echo("✓ Database initialized")
    if seeded:
        click.echo("  Demo data: inserted")


@db.command("seed")
@click.confirmation_option(prompt="This deletes every user and post. Continue?")
def seed_db() -> None:
    """Delete all users and posts, then insert the demo data."""
    from blogql.database import dispose_database, init_database
    from blogql.database.seed_data import reset_and_seed
    from blogql.storage.sql import SqlBlogRepository

    configure_logging()

    async def do_seed() -> dict[str, int]:
        init_database()
        try:
            return await reset_and_seed(SqlBlogRepository())
        finally:
            await dispose_database()

    try:
        counts = asyncio.run(do_seed())
    except Exception as e:
        logger.error("Seeding failed", error=str(e))
        click.echo(f"✗ Error seeding database: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Seeded {counts['users']} user(s) and {counts['posts']} post(s)")


def _run_migration(description: str, func, *args, **kwargs) -> None:
    configure_logging()
    try:
        func(*args, **kwargs)
    except Exception as e:
        logger.error("Migration command failed", command=description, error=str(e))
        click.echo(f"✗ {description} failed: {e}", err=True)
        sys.exit(1)


@db.command("upgrade")
@click.argument("revision", default="head")
def upgrade_db(revision: str) -> None:
    """Apply migrations up to REVISION (default: head)."""
    from blogql.database import migrations

    _run_migration("Upgrade", migrations.upgrade, revision)
    click.echo(f"✓ Database upgraded to {revision}")


@db.command("downgrade")
@click.argument("revision", default="-1")
def downgrade_db(revision: str) -> None:
    """Revert migrations down to REVISION (default: one step)."""
    from blogql.database import migrations

    _run_migration("Downgrade", migrations.downgrade, revision)
    click.echo(f"✓ Database downgraded to {revision}")


@db.command("revision")
@click.option("-m", "--message", required=True, help="Revision message")
@click.option("--autogenerate/--no-autogenerate", default=True, help="Diff against the models")
def revision_db(message: str, autogenerate: bool) -> None:
    """Create a new migration script."""
    from blogql.database import migrations

    _run_migration("Revision", migrations.create_revision, message, autogenerate=autogenerate)


@db.command("current")
@click.option("--verbose", is_flag=True, default=False)
def current_db(verbose: bool) -> None:
    """Show the database revision next to the latest script."""
    from blogql.database import migrations

    _run_migration("Current", migrations.show_current, verbose=verbose)
    click.echo(f"Head revision: {migrations.head_revision()}")


@db.command("history")
def history_db() -> None:
    """List migration scripts."""
    from blogql.database import migrations

    _run_migration("History", migrations.show_history)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
