"""GraphQL schema, resolvers and request context."""
