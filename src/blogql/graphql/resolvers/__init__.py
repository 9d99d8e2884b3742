"""Resolver functions referenced by the GraphQL types, queries, and mutations.

Resolvers read the repository, DataLoaders, settings and auth context from
``info.context`` (see :mod:`blogql.graphql.context`).
"""
