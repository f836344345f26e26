"""Read-only product catalog."""
import logging
from typing import List, Optional

from storefront.errors import ERROR_PRODUCT_NOT_FOUND, ValidationError
from storefront.services.http import ApiClient

from .models import Product

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


class ProductService:
    """Public product listing and product detail lookups."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def list_products(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        search: str = "",
    ) -> List[Product]:
        """
        GET /products?page=&limit=&search=

        Pages are 1-based; an empty search matches everything.
        """
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be at least 1")
        response = await self.api.get(
            "/products",
            params={"page": page, "limit": limit, "search": search.strip()},
        )
        return [Product.from_dict(row) for row in response.json() or []]

    async def get_product(self, product_id: int, token: Optional[str] = None) -> Product:
        """Raises NotFoundError for unknown ids."""
        response = await self.api.get(
            f"/products/{product_id}", token=token, not_found=ERROR_PRODUCT_NOT_FOUND
        )
        return Product.from_dict(response.json())
