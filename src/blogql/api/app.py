"""
Main FastAPI application for the blogql server
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..auth.factory import get_auth_adapter
from ..config import Settings, settings as default_settings
from ..database import create_schema, dispose_database, init_database
from ..database.connection import test_database_connection
from ..database.seed_data import seed_if_empty
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..storage import BlogRepository, MemoryBlogRepository, create_repository
from ..storage.sql import SqlBlogRepository

logger = get_logger(__name__)


async def _prepare_database() -> None:
    init_database()

    ok, error = await test_database_connection()
    if not ok:
        raise RuntimeError(error)

    await create_schema()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    logger.info("Starting blogql API...", storage=settings.storage_backend)

    uses_database = isinstance(app.state.repository, SqlBlogRepository)
    database_ready = not uses_database
    if uses_database:
        try:
            await _prepare_database()
            database_ready = True
        except Exception as e:
            logger.error("Database initialization failed", error=str(e))
            if settings.environment.lower() in ("production", "prod"):
                raise

    if settings.seed_on_startup and database_ready:
        try:
            await seed_if_empty(app.state.repository)
        except Exception as e:
            logger.error("Seeding failed", error=str(e))

    if settings.enable_feed:
        await seed_if_empty(app.state.feed_repository)

    yield

    logger.info("Shutting down blogql API...")
    if uses_database:
        await dispose_database()


def create_app(
    settings: Settings | None = None,
    repository: BlogRepository | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or default_settings

    app = FastAPI(
        title="blogql",
        description="GraphQL demonstration server for users and posts",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    if repository is None:
        repository = create_repository(settings.storage_backend)
    app.state.repository = repository
    app.state.feed_repository = MemoryBlogRepository()
    app.state.auth_adapter = get_auth_adapter(settings)

    graphql_paths = [settings.graphql_path]
    if settings.enable_feed:
        graphql_paths.append(settings.feed_path)

    app.add_middleware(LoggingContextMiddleware, graphql_paths=graphql_paths)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    try:
        from ..graphql.feed import create_feed_router, feed_schema
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()
        app.include_router(create_graphql_router(settings.graphql_path), prefix="")
        logger.info("GraphQL endpoint initialized", endpoint=settings.graphql_path)

        if settings.enable_feed:
            validate_schema(feed_schema)
            app.include_router(create_feed_router(settings.feed_path), prefix="")
            logger.info("Feed endpoint initialized", endpoint=settings.feed_path)
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    return app


configure_logging(debug=default_settings.debug, log_level=default_settings.log_level)

# Main application instance for `uvicorn blogql.api.app:app`
app = create_app()
