"""
Errors surfaced to GraphQL clients

Strawberry reports any exception raised by a resolver as a GraphQL error
carrying the exception message; these classes give those messages a stable
shape and let tests assert on the error kind.
"""


class BlogError(Exception):
    """Base class for errors reported to API clients."""

    code = "BAD_REQUEST"


class NotFoundError(BlogError):
    code = "NOT_FOUND"


class ConflictError(BlogError):
    code = "CONFLICT"


class ValidationError(BlogError):
    code = "BAD_USER_INPUT"


class UnauthorizedError(BlogError):
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
