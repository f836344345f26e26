"""Remote cart API client."""
import logging
from typing import List

import httpx

from storefront.catalog.models import Product
from storefront.errors import (
    ERROR_CART_ITEM_NOT_FOUND,
    ERROR_MALFORMED_RESPONSE,
    ERROR_PRODUCT_NOT_FOUND,
    ApiError,
)
from storefront.logging import sanitize_id_for_logging
from storefront.models import AddToCartRequest, UpdateCartItemRequest
from storefront.services.http import ApiClient

from .models import CartLine

logger = logging.getLogger(__name__)


class CartService:
    """
    Thin wrapper over the /cart endpoints.

    Every call needs the caller's bearer token; errors surface as
    storefront exceptions raised by ApiClient.
    """

    def __init__(self, api: ApiClient):
        self.api = api

    async def fetch_items(self, token: str) -> List[CartLine]:
        """
        GET /cart/my-cart. Rows with a non-positive quantity are dropped.

        Raises ApiError when the body is not a list of cart rows.
        """
        response = await self.api.get("/cart/my-cart", token=token)
        try:
            lines = []
            for row in response.json() or []:
                if int(row.get("quantity") or 0) < 1:
                    logger.warning(
                        "Dropping cart row %s with quantity %s",
                        sanitize_id_for_logging(row.get("id")),
                        row.get("quantity"),
                    )
                    continue
                lines.append(CartLine.from_dict(row))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error("Malformed cart payload: %s", e)
            raise ApiError(ERROR_MALFORMED_RESPONSE, status_code=response.status_code) from e
        return lines

    async def get_product(self, product_id: int, token: str) -> Product:
        """GET /products/{id}, used for the stock check before adding."""
        response = await self.api.get(
            f"/products/{product_id}", token=token, not_found=ERROR_PRODUCT_NOT_FOUND
        )
        try:
            return Product.from_dict(response.json())
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Malformed product payload for %s: %s", sanitize_id_for_logging(product_id), e)
            raise ApiError(ERROR_MALFORMED_RESPONSE, status_code=response.status_code) from e

    async def add_item(self, token: str, product_id: int, quantity: int) -> httpx.Response:
        payload = AddToCartRequest(product_id=product_id, quantity=quantity)
        return await self.api.post("/cart/add", token=token, json=payload.model_dump(by_alias=True))

    async def update_item(self, token: str, product_id: int, quantity: int) -> httpx.Response:
        payload = UpdateCartItemRequest(quantity=quantity)
        return await self.api.put(
            f"/cart/{product_id}",
            token=token,
            json=payload.model_dump(),
            not_found=ERROR_CART_ITEM_NOT_FOUND,
        )

    async def delete_item(self, token: str, product_id: int) -> httpx.Response:
        return await self.api.delete(f"/cart/{product_id}", token=token, not_found=ERROR_CART_ITEM_NOT_FOUND)
