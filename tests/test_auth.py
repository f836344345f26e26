"""
Tests for token validation, credential storage and AuthService
"""
import json
import time

import pytest

from storefront.auth import (
    AuthService,
    CredentialStore,
    SessionInvalidator,
    TokenValidator,
    is_token_expired,
    login_redirect_url,
)
from storefront.errors import ApiError, AuthMissingError


class TestTokenValidator:

    def test_valid_token(self, valid_token):
        assert TokenValidator().is_valid(valid_token) is True

    def test_expired_token(self, expired_token):
        assert TokenValidator().is_valid(expired_token) is False

    def test_missing_token(self):
        assert TokenValidator().is_valid(None) is False
        assert TokenValidator().is_valid("") is False

    def test_garbage_token(self):
        assert TokenValidator().is_valid("not-a-jwt") is False

    def test_token_without_exp(self, token_factory):
        assert TokenValidator().is_valid(token_factory(exp_offset=None)) is False

    def test_injected_clock(self, token_factory):
        token = token_factory(exp_offset=100)
        future = TokenValidator(clock=lambda: time.time() + 1000)
        assert future.is_valid(token) is False

    def test_decode_ignores_signature(self, token_factory):
        claims = TokenValidator().decode(token_factory(role="ADMIN"))
        assert claims["role"] == "ADMIN"

    def test_is_token_expired_helper(self, valid_token, expired_token):
        assert is_token_expired(valid_token) is False
        assert is_token_expired(expired_token) is True
        assert is_token_expired(None) is True


class TestCredentialStore:

    def test_valid_token_returned(self, credentials, valid_token):
        assert credentials.valid_token() == valid_token
        assert credentials.is_authenticated()

    def test_expired_token_purged(self, expired_token, sample_user):
        store = CredentialStore()
        store.set(expired_token, sample_user)

        assert store.valid_token() is None
        assert store.token is None
        assert store.user is None

    def test_set_accepts_user_dict(self, valid_token):
        store = CredentialStore()
        store.set(valid_token, {"id": 2, "name": "A", "email": "a@b.c", "role": "admin"})
        assert store.is_admin()

    def test_non_admin(self, credentials):
        assert credentials.is_admin() is False


class TestSessionInvalidator:

    def test_redirect_url_encodes_path(self):
        assert login_redirect_url("/cart?x=1") == "/login?returnUrl=%2Fcart%3Fx%3D1"

    def test_invalidate_clears_and_redirects(self, credentials):
        seen = []
        invalidator = SessionInvalidator(credentials, seen.append, login_path="/signin")

        url = invalidator.invalidate("/checkout")

        assert url == "/signin?returnUrl=%2Fcheckout"
        assert seen == [url]
        assert credentials.token is None

    def test_invalidate_without_handler(self, credentials):
        url = SessionInvalidator(credentials).invalidate()
        assert url == "/login?returnUrl=%2F"


class TestAuthService:

    @pytest.mark.asyncio
    async def test_login_stores_credentials(self, api_client, handler, valid_token):
        handler.add("POST", "/auth/login", 201, {
            "access_token": valid_token,
            "user": {"id": 4, "name": "Ann", "email": "ann@example.com", "role": "USER"},
        })
        store = CredentialStore()
        service = AuthService(api_client, store)

        user = await service.login("ann@example.com", "secret")

        assert user.id == 4
        assert store.valid_token() == valid_token
        assert json.loads(handler.requests[0].content) == {"email": "ann@example.com", "password": "secret"}

    @pytest.mark.asyncio
    async def test_login_without_token_fails(self, api_client, handler):
        handler.add("POST", "/auth/login", 201, {"user": {"id": 4, "name": "Ann", "email": "a@b.c"}})

        with pytest.raises(ApiError):
            await AuthService(api_client, CredentialStore()).login("a@b.c", "pw")

    @pytest.mark.asyncio
    async def test_signup(self, api_client, handler):
        handler.add("POST", "/users/signup", 201, {"id": 10})

        result = await AuthService(api_client, CredentialStore()).signup("Bo", "bo@example.com", "pw")

        assert result == {"id": 10}
        assert json.loads(handler.requests[0].content)["name"] == "Bo"

    @pytest.mark.asyncio
    async def test_logout_clears_credentials_and_cart(self, api_client, handler, credentials, cart_store):
        handler.add("POST", "/auth/logout", 200, {"message": "ok"})
        cart_store.clear_cart = lambda: setattr(cart_store, "_cleared", True)

        await AuthService(api_client, credentials, cart=cart_store).logout()

        assert credentials.token is None
        assert getattr(cart_store, "_cleared", False)
        assert handler.requests[0].headers["Authorization"].startswith("Bearer ")

    @pytest.mark.asyncio
    async def test_logout_clears_even_when_server_fails(self, api_client, handler, credentials):
        handler.add("POST", "/auth/logout", 500, {"message": "down"})

        await AuthService(api_client, credentials).logout()

        assert credentials.token is None


class TestUpdateProfile:

    @pytest.mark.asyncio
    async def test_empty_password_not_sent(self, api_client, handler, credentials):
        handler.add("PUT", "/users/7", 200, {"id": 7})

        user = await AuthService(api_client, credentials).update_profile("New Name", "new@example.com", "")

        assert handler.requests[0].url.path == "/users/7"
        assert json.loads(handler.requests[0].content) == {"name": "New Name", "email": "new@example.com"}
        assert user.name == "New Name"
        assert credentials.user.email == "new@example.com"
        assert credentials.user.id == 7

    @pytest.mark.asyncio
    async def test_password_sent_when_given(self, api_client, handler, credentials):
        handler.add("PUT", "/users/7", 200, {"id": 7})

        await AuthService(api_client, credentials).update_profile("Test User", "user@example.com", "hunter22")

        assert json.loads(handler.requests[0].content)["password"] == "hunter22"

    @pytest.mark.asyncio
    async def test_requires_login(self, api_client, handler):
        with pytest.raises(AuthMissingError):
            await AuthService(api_client, CredentialStore()).update_profile("A", "a@b.c")
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_rejected_update_keeps_user(self, api_client, handler, credentials):
        handler.add("PUT", "/users/7", 400, {"message": ["email must be an email"]})

        with pytest.raises(ApiError) as exc_info:
            await AuthService(api_client, credentials).update_profile("Test User", "nope")

        assert exc_info.value.message == "email must be an email"
        assert credentials.user.email == "user@example.com"
