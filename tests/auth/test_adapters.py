"""
Direct tests for auth adapters without external dependencies
"""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from blogql.auth.adapters.base import AuthenticationError
from blogql.auth.adapters.jwt import JWTAuthAdapter
from blogql.auth.adapters.none import NoAuthAdapter
from blogql.auth.factory import get_auth_adapter
from blogql.config import Settings

SECRET = "test-secret-key"


class TestJWTAuthAdapter:
    @pytest.mark.asyncio
    async def test_round_trip_preserves_claims(self):
        adapter = JWTAuthAdapter(secret_key=SECRET)

        token = await adapter.issue_token(user_id=7, claims={"email": "u@example.com", "name": "U"})
        principal = await adapter.verify_token(token)

        assert principal["provider"] == "jwt"
        assert principal["subject"] == "7"
        assert principal["email"] == "u@example.com"
        assert principal["display_name"] == "U"

    @pytest.mark.asyncio
    async def test_wrong_secret_rejected(self):
        token = await JWTAuthAdapter(secret_key="other").issue_token(user_id=1)

        with pytest.raises(AuthenticationError, match="Invalid token"):
            await JWTAuthAdapter(secret_key=SECRET).verify_token(token)

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self):
        past = datetime.now(UTC) - timedelta(hours=2)
        token = jwt.encode(
            {
                "sub": "1",
                "iss": "blogql",
                "aud": "blogql-api",
                "iat": past,
                "nbf": past,
                "exp": past + timedelta(minutes=5),
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError):
            await JWTAuthAdapter(secret_key=SECRET).verify_token(token)

    @pytest.mark.asyncio
    async def test_wrong_audience_rejected(self):
        token = await JWTAuthAdapter(secret_key=SECRET, audience="elsewhere").issue_token(user_id=1)

        with pytest.raises(AuthenticationError):
            await JWTAuthAdapter(secret_key=SECRET).verify_token(token)

    @pytest.mark.asyncio
    async def test_missing_subject_rejected(self):
        token = await JWTAuthAdapter(secret_key=SECRET).issue_token()

        with pytest.raises(AuthenticationError, match="sub"):
            await JWTAuthAdapter(secret_key=SECRET).verify_token(token)


class TestNoAuthAdapter:
    @pytest.mark.asyncio
    async def test_any_token_is_default_user(self):
        principal = await NoAuthAdapter().verify_token("anything")

        assert principal["provider"] == "none"
        assert principal["subject"] == "dev-user"

    @pytest.mark.asyncio
    async def test_issued_token_carries_user_id(self):
        adapter = NoAuthAdapter()

        token = await adapter.issue_token(user_id=3, claims={"email": "x@example.com"})
        principal = await adapter.verify_token(token)

        assert token == "dev-token|3|no-auth-mode|email=x@example.com"
        assert principal["subject"] == "3"

    @pytest.mark.asyncio
    async def test_empty_token_rejected(self):
        with pytest.raises(AuthenticationError):
            await NoAuthAdapter().verify_token("")

    def test_refuses_production(self):
        with pytest.raises(RuntimeError, match="production"):
            NoAuthAdapter(environment="production")


class TestFactory:
    def test_none_provider(self):
        adapter = get_auth_adapter(Settings(auth_provider="none"))

        assert isinstance(adapter, NoAuthAdapter)

    def test_jwt_provider(self):
        adapter = get_auth_adapter(
            Settings(auth_provider="jwt", jwt_secret=SECRET, jwt_issuer="custom")
        )

        assert isinstance(adapter, JWTAuthAdapter)
        assert adapter.issuer == "custom"

    def test_jwt_requires_secret(self):
        with pytest.raises(ValueError, match="JWT secret"):
            get_auth_adapter(Settings(auth_provider="jwt", jwt_secret=None))

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported auth provider"):
            get_auth_adapter(Settings(auth_provider="ldap"))
