"""
Tests for request logging helpers
"""

import pytest

from blogql.logging import (
    add_request_context,
    generate_request_id,
    get_request_id,
    request_context,
)
from blogql.middleware import operation_name_from_payload, sanitize_query_params


@pytest.mark.parametrize(
    "payload,expected",
    [
        ({"operationName": "GetUser", "query": "query Other { hello }"}, "GetUser"),
        ({"query": "query ListPosts { posts { id } }"}, "ListPosts"),
        ({"query": "mutation CreatePost { createPost { id } }"}, "mutation:CreatePost"),
        ({"query": "{ hello }"}, "unnamed_operation"),
        ({"query": "query IntrospectionQuery { __schema { types { name } } }"}, "__introspection"),
        ({}, None),
    ],
)
def test_operation_name_from_payload(payload, expected):
    assert operation_name_from_payload(payload) == expected


def test_sanitize_query_params_redacts_secrets():
    sanitized = sanitize_query_params({"access_token": "abc", "page": "2", "Password": "x"})

    assert sanitized == {"access_token": "[REDACTED]", "page": "2", "Password": "[REDACTED]"}


def test_request_context_lifecycle():
    with request_context() as request_id:
        assert get_request_id() == request_id
        assert len(request_id) == 16

    assert get_request_id() is None


def test_request_context_is_reset_on_error():
    with pytest.raises(RuntimeError):
        with request_context(request_id="abc"):
            raise RuntimeError("boom")

    assert get_request_id() is None


def test_processor_adds_request_fields():
    with request_context(request_id="abc", operation="mutation:CreatePost"):
        event = add_request_context(None, "info", {"event": "Request started"})

    assert event == {
        "event": "Request started",
        "request_id": "abc",
        "graphql_operation": "mutation:CreatePost",
    }


def test_processor_keeps_explicit_fields():
    with request_context(request_id="abc"):
        event = add_request_context(None, "info", {"event": "x", "request_id": "given"})

    assert event == {"event": "x", "request_id": "given"}


def test_request_ids_are_unique():
    assert len({generate_request_id() for _ in range(100)}) == 100
