"""
HTTP-level tests for the FastAPI application
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from blogql import __version__
from blogql.api.app import create_app
from blogql.config import Settings
from blogql.storage.memory import MemoryBlogRepository


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    app = create_app(test_settings, repository=MemoryBlogRepository())
    with TestClient(app) as test_client:
        yield test_client


def graphql(client: TestClient, query: str, variables=None, token: str | None = None, path="/graphql"):
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    response = client.post(path, json={"query": query, "variables": variables}, headers=headers)
    assert response.status_code == 200
    return response.json()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": __version__}


def test_responses_carry_request_id(client):
    first = client.get("/health").headers["X-Request-ID"]
    second = client.get("/health").headers["X-Request-ID"]

    assert len(first) == 16
    assert first != second


def test_startup_seeds_empty_repository(client):
    body = graphql(client, "{ users { name } posts { id } }")

    assert body["data"]["users"] == [{"name": "Guigui"}, {"name": "Test"}]
    assert len(body["data"]["posts"]) == 3


def test_startup_does_not_reseed(test_settings):
    repository = MemoryBlogRepository()
    app = create_app(test_settings, repository=repository)

    with TestClient(app):
        pass
    with TestClient(app) as second:
        body = graphql(second, "{ users { id } }")

    assert len(body["data"]["users"]) == 2


def test_login_then_me(client):
    login = graphql(
        client,
        """
        mutation Login($email: String!, $password: String!) {
            login(email: $email, password: $password) { token }
        }
        """,
        {"email": "test@example.com", "password": "password456"},
    )
    token = login["data"]["login"]["token"]

    anonymous = graphql(client, "{ me { id } }")
    signed_in = graphql(client, "{ me { id name } }", token=token)

    assert anonymous["data"]["me"] is None
    assert signed_in["data"]["me"] == {"id": "2", "name": "Test"}


def test_errors_are_reported_in_body(client):
    body = graphql(client, '{ post(id: "nope") { id } }')

    assert body["data"] == {"post": None}
    assert "Invalid id" in body["errors"][0]["message"]


def test_feed_endpoint(client):
    body = graphql(client, "{ feedPosts(published: true) { postID postTitle } }", path="/feed")

    assert [post["postID"] for post in body["data"]["feedPosts"]] == ["1", "2"]


def test_feed_is_separate_from_main_store(client):
    graphql(client, 'mutation { deletePost(id: "1") { id } }')

    body = graphql(client, '{ feedPost(postID: "1") { postID } }', path="/feed")

    assert body["data"]["feedPost"] == {"postID": "1"}


def test_feed_can_be_disabled(test_settings):
    settings = test_settings.model_copy(update={"enable_feed": False})
    app = create_app(settings, repository=MemoryBlogRepository())

    with TestClient(app) as client:
        response = client.post("/feed", json={"query": "{ hello }"})

    assert response.status_code == 404
