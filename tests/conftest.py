"""Pytest configuration and fixtures"""
import json
import os
import time
from typing import Callable, List
from unittest.mock import AsyncMock

import httpx
import jwt
import pytest

from storefront.auth import AuthUser, CredentialStore, SessionInvalidator
from storefront.cart import CartStore
from storefront.catalog import Product
from storefront.config import Settings
from storefront.services.http import ApiClient

os.environ.setdefault("STOREFRONT_API_URL", "http://api.test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

TEST_SETTINGS = Settings(api_url="http://api.test", http_timeout=5.0, login_path="/login")


def make_token(exp_offset: int = 3600, **claims) -> str:
    """Sign a JWT with an arbitrary key; the client never checks signatures."""
    payload = {"sub": "1", **claims}
    if exp_offset is not None:
        payload["exp"] = int(time.time()) + exp_offset
    return jwt.encode(payload, "storefront-test-signing-key-0123456789", algorithm="HS256")


def json_response(status_code: int, data=None) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(data).encode(), headers={"content-type": "application/json"})


class RecordingHandler:
    """httpx.MockTransport handler that replays canned responses by (method, path)."""

    def __init__(self):
        self.routes: dict = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, status_code: int = 200, data=None) -> None:
        self.routes[(method, path)] = (status_code, data)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return json_response(404, {"message": "Not Found"})
        status_code, data = self.routes[key]
        return json_response(status_code, data)


@pytest.fixture
def valid_token() -> str:
    return make_token()


@pytest.fixture
def expired_token() -> str:
    return make_token(exp_offset=-60)


@pytest.fixture
def sample_user() -> AuthUser:
    return AuthUser(id=7, name="Test User", email="user@example.com", role="USER")


@pytest.fixture
def admin_user() -> AuthUser:
    return AuthUser(id=1, name="Admin", email="admin@example.com", role="ADMIN")


@pytest.fixture
def credentials(valid_token, sample_user) -> CredentialStore:
    store = CredentialStore()
    store.set(valid_token, sample_user)
    return store


@pytest.fixture
def admin_credentials(admin_user) -> CredentialStore:
    store = CredentialStore()
    store.set(make_token(), admin_user)
    return store


@pytest.fixture
def redirects() -> List[str]:
    return []


@pytest.fixture
def invalidator(credentials, redirects) -> SessionInvalidator:
    inv = SessionInvalidator(credentials, redirects.append)
    inv.current_path = "/products/3"
    return inv


@pytest.fixture
def sample_product() -> Product:
    return Product(
        id=3,
        name="Desk Lamp",
        description="LED lamp",
        price="24.50",
        stock=5,
        category_id=2,
    )


@pytest.fixture
def mock_cart_service(sample_product):
    """CartService stand-in; every remote call is an AsyncMock."""
    service = AsyncMock()
    service.fetch_items = AsyncMock(return_value=[])
    service.get_product = AsyncMock(return_value=sample_product)
    service.add_item = AsyncMock(return_value=httpx.Response(201))
    service.update_item = AsyncMock(return_value=httpx.Response(200))
    service.delete_item = AsyncMock(return_value=httpx.Response(200))
    return service


@pytest.fixture
def cart_store(mock_cart_service, credentials, invalidator) -> CartStore:
    return CartStore(mock_cart_service, credentials, invalidator)


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def api_client(handler) -> ApiClient:
    return ApiClient(TEST_SETTINGS, transport=httpx.MockTransport(handler))


@pytest.fixture
def token_factory() -> Callable[..., str]:
    return make_token
