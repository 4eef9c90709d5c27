"""
Tests for JWT authentication middleware.
"""

import asyncio
import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from api import app
from api.dependencies import get_user_repository
from api.middleware.auth import AuthError, decode_token, get_user_from_payload
from api.models.user import TokenPayload
from modules.accounts.repository import InMemoryUserRepository
from tests.conftest import TEST_JWT_SECRET, create_test_token

client = TestClient(app)


class TestDecodeToken:

    @patch("api.middleware.auth.get_settings")
    def test_valid_token(self, mock_settings):
        """Valid token should decode successfully."""
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        payload = decode_token(create_test_token())
        assert payload.sub == "test-user-123"
        assert payload.email == "test@example.com"
        assert payload.aud == "authenticated"

    @patch("api.middleware.auth.get_settings")
    def test_expired_token(self, mock_settings):
        """Expired token should raise AuthError."""
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        with pytest.raises(AuthError) as exc_info:
            decode_token(create_test_token(expired=True))
        assert "expired" in exc_info.value.detail.lower()

    @patch("api.middleware.auth.get_settings")
    def test_invalid_token(self, mock_settings):
        """Garbage token should raise AuthError."""
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        with pytest.raises(AuthError) as exc_info:
            decode_token("invalid-token")
        assert "Invalid token" in exc_info.value.detail

    @patch("api.middleware.auth.get_settings")
    def test_wrong_secret(self, mock_settings):
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        with pytest.raises(AuthError):
            decode_token(create_test_token(secret="some-other-secret"))

    @patch("api.middleware.auth.get_settings")
    def test_missing_jwt_secret(self, mock_settings):
        mock_settings.return_value.supabase_jwt_secret = ""
        with pytest.raises(AuthError) as exc_info:
            decode_token(create_test_token())
        assert "not configured" in exc_info.value.detail.lower()
        assert exc_info.value.status_code == 401


class TestProtectedRoutes:

    def test_missing_auth_header(self):
        """Request without auth header should return 401."""
        response = client.get("/api/users/me")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    @patch("api.middleware.auth.get_settings")
    def test_protected_route_with_valid_token(self, mock_settings):
        """Protected route should resolve the token's user."""
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        repository = InMemoryUserRepository()
        app.dependency_overrides[get_user_repository] = lambda: repository

        try:
            asyncio.run(repository.create("test-user-123", "test@example.com"))
            response = client.get(
                "/api/users/me",
                headers={"Authorization": f"Bearer {create_test_token()}"},
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "test-user-123"
        assert data["email"] == "test@example.com"
        assert data["email_verified"] is False

    @patch("api.middleware.auth.get_settings")
    def test_protected_route_with_expired_token(self, mock_settings):
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        response = client.post(
            "/api/chat",
            json={"messages": [{"role": "user", "content": "hi"}]},
            headers={"Authorization": f"Bearer {create_test_token(expired=True)}"},
        )
        assert response.status_code == 401
        assert "expired" in response.json()["detail"].lower()


class TestTokenPayloadConversion:

    def test_get_user_from_payload(self):
        """Should convert payload to AuthenticatedUser."""
        payload = TokenPayload(
            sub="user-123",
            email="test@example.com",
            aud="authenticated",
            exp=9999999999,
            iat=1704067200,
        )
        user = get_user_from_payload(payload)
        assert user.id == "user-123"
        assert user.email == "test@example.com"
        assert user.role == "user"
        assert user.last_sign_in.year == 2024

    def test_extra_claims_are_ignored(self):
        payload = TokenPayload(
            sub="user-456",
            email="x@example.com",
            aud="authenticated",
            exp=9999999999,
            iat=1704067200,
            role="authenticated",
            email_confirmed_at="2024-01-01T00:00:00Z",
        )
        user = get_user_from_payload(payload)
        assert not hasattr(user, "email_verified")
