"""
Unit tests for backend/auth.py (API keys and Supabase access tokens).
"""
import time

import jwt
import pytest
from fastapi import HTTPException

from backend.auth import get_current_user, validate_api_key, validate_jwt
from backend.settings import get_settings

pytestmark = pytest.mark.unit

SECRET = "super-secret-jwt-token-with-at-least-32-characters"
KEY_USER = "1b4e28ba-2fa1-11d2-883f-0016d3cca427"


def _token(sub="user-1", aud="authenticated", exp_offset=3600, secret=SECRET) -> str:
    payload = {"aud": aud, "exp": int(time.time()) + exp_offset, "role": "authenticated"}
    if sub is not None:
        payload["sub"] = sub
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def auth_env(monkeypatch):
    """Configure the secret and API keys through the environment."""
    monkeypatch.setenv("SUPABASE_JWT_SECRET", SECRET)
    monkeypatch.setenv("API_KEYS", "sk_test_abc,sk_test_def")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def no_auth_env(monkeypatch):
    monkeypatch.delenv("SUPABASE_JWT_SECRET", raising=False)
    monkeypatch.delenv("API_KEYS", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestValidateApiKey:
    def test_key_with_user(self, auth_env):
        assert validate_api_key(f"sk_test_def:{KEY_USER}") == KEY_USER

    def test_user_id_is_normalized(self, auth_env):
        assert validate_api_key(f"sk_test_def:{KEY_USER.upper()}") == KEY_USER

    @pytest.mark.parametrize("api_key", ["sk_test_abc", "sk_test_def:"])
    def test_key_without_user_is_rejected(self, auth_env, api_key):
        with pytest.raises(HTTPException) as exc_info:
            validate_api_key(api_key)
        assert exc_info.value.status_code == 401
        assert "key:user_id" in exc_info.value.detail

    @pytest.mark.parametrize("user_id", ["admin", "user_12345"])
    def test_non_uuid_user_is_rejected(self, auth_env, user_id):
        with pytest.raises(HTTPException) as exc_info:
            validate_api_key(f"sk_test_abc:{user_id}")
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "API key user id must be a UUID"

    def test_invalid_key(self, auth_env):
        with pytest.raises(HTTPException) as exc_info:
            validate_api_key(f"sk_wrong:{KEY_USER}")
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid API key"

    def test_not_configured(self, no_auth_env):
        with pytest.raises(HTTPException) as exc_info:
            validate_api_key(f"sk_test_abc:{KEY_USER}")
        assert exc_info.value.status_code == 401


class TestValidateJwt:
    def test_valid_token(self, auth_env):
        assert validate_jwt(f"Bearer {_token()}") == "user-1"

    def test_requires_bearer_prefix(self, auth_env):
        with pytest.raises(HTTPException) as exc_info:
            validate_jwt(_token())
        assert exc_info.value.status_code == 401

    def test_expired(self, auth_env):
        with pytest.raises(HTTPException) as exc_info:
            validate_jwt(f"Bearer {_token(exp_offset=-60)}")
        assert exc_info.value.detail == "Token expired"

    @pytest.mark.parametrize("token_kwargs", [
        {"secret": "another-secret-that-is-also-long-enough-32"},
        {"aud": "anon"},
    ])
    def test_invalid_signature_or_audience(self, auth_env, token_kwargs):
        with pytest.raises(HTTPException) as exc_info:
            validate_jwt(f"Bearer {_token(**token_kwargs)}")
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail.startswith("Invalid token")

    def test_missing_sub(self, auth_env):
        with pytest.raises(HTTPException) as exc_info:
            validate_jwt(f"Bearer {_token(sub=None)}")
        assert exc_info.value.detail == "Token missing user ID"

    def test_secret_not_configured(self, no_auth_env):
        with pytest.raises(HTTPException) as exc_info:
            validate_jwt(f"Bearer {_token()}")
        assert exc_info.value.status_code == 500


class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_api_key_takes_precedence(self, auth_env):
        user = await get_current_user(
            authorization=f"Bearer {_token()}",
            x_api_key=f"sk_test_abc:{KEY_USER}",
        )
        assert user == KEY_USER

    @pytest.mark.asyncio
    async def test_jwt(self, auth_env):
        assert await get_current_user(authorization=f"Bearer {_token()}", x_api_key=None) == "user-1"

    @pytest.mark.asyncio
    async def test_missing_credentials(self, auth_env):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(authorization=None, x_api_key=None)
        assert exc_info.value.status_code == 401
