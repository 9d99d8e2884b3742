"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import Request
from graphql import GraphQLSchema, get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter

from ..auth.middleware import resolve_auth_context
from ..logging import get_logger
from .context import build_context
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)

schema = strawberry.Schema(query=Query, mutation=Mutation)


class SchemaValidationError(Exception):
    """Raised when a schema fails validation at startup."""


def validate_schema(target: strawberry.Schema | None = None) -> None:
    """Validate a GraphQL schema at startup.

    Resolves every type reference and runs an introspection query so broken
    lazy types fail the process instead of surfacing as runtime errors.

    Raises:
        SchemaValidationError: If the schema is invalid or has unresolved types
    """
    target = target or schema
    graphql_schema: GraphQLSchema = target._schema

    errors = gql_validate_schema(graphql_schema)
    if errors:
        message = "; ".join(str(e) for e in errors)
        logger.error("GraphQL schema validation failed", error=message)
        raise SchemaValidationError(f"GraphQL schema validation failed: {message}")

    result = graphql_sync(graphql_schema, get_introspection_query())
    if result.errors:
        message = "; ".join(str(e) for e in result.errors)
        logger.error("GraphQL introspection failed", error=message)
        raise SchemaValidationError(f"GraphQL introspection failed: {message}")

    logger.info("GraphQL schema validation successful")


async def get_context(request: Request) -> dict[str, Any]:
    """Build resolver context from application state and request headers."""
    state = request.app.state
    auth = await resolve_auth_context(request.headers.get("authorization"), state.auth_adapter)
    return build_context(
        state.repository,
        auth=auth,
        auth_adapter=state.auth_adapter,
        settings=state.settings,
        request=request,
    )


def create_graphql_router(path: str = "/graphql") -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI."""
    return GraphQLRouter(
        schema,
        path=path,
        graphql_ide="graphiql",
        context_getter=get_context,
    )
