"""Checkout and order history."""
import logging
from typing import Any, List

import pydantic

from storefront.auth.session import CredentialStore
from storefront.cart.store import CartStore
from storefront.errors import (
    ERROR_SHIPPING_ADDRESS_REQUIRED,
    AuthMissingError,
    ValidationError,
)
from storefront.logging import sanitize_id_for_logging
from storefront.models import ConfirmOrderRequest
from storefront.services.http import ApiClient

from .models import Order

logger = logging.getLogger(__name__)


class OrderService:
    """Order endpoints for the logged-in user."""

    def __init__(self, api: ApiClient, credentials: CredentialStore):
        self.api = api
        self.credentials = credentials

    def _token(self) -> str:
        token = self.credentials.valid_token()
        if token is None:
            raise AuthMissingError()
        return token

    async def checkout_details(self) -> dict[str, Any]:
        """POST /orders/checkout: server-side summary of what confirming would order."""
        response = await self.api.post("/orders/checkout", token=self._token())
        return response.json()

    async def confirm(self, shipping_address: str) -> dict[str, Any]:
        """POST /orders/confirm. The server turns the current cart into an order."""
        try:
            payload = ConfirmOrderRequest(shipping_address=shipping_address)
        except pydantic.ValidationError as e:
            raise ValidationError(ERROR_SHIPPING_ADDRESS_REQUIRED) from e

        response = await self.api.post(
            "/orders/confirm",
            token=self._token(),
            json=payload.model_dump(by_alias=True),
        )
        return response.json()

    async def list_user_orders(self, user_id: int | None = None) -> List[Order]:
        """GET /orders/{userId}; defaults to the logged-in user."""
        token = self._token()
        if user_id is None:
            user = self.credentials.user
            if user is None:
                raise AuthMissingError()
            user_id = user.id
        response = await self.api.get(f"/orders/{user_id}", token=token)
        return [Order.from_dict(row) for row in response.json()]


class CheckoutFlow:
    """Confirms the order and empties the local cart mirror."""

    def __init__(self, orders: OrderService, cart: CartStore):
        self.orders = orders
        self.cart = cart

    async def place_order(self, shipping_address: str) -> dict[str, Any]:
        result = await self.orders.confirm(shipping_address)
        self.cart.clear_cart()
        logger.info("Order placed: %s", sanitize_id_for_logging(result.get("id")))
        return result
