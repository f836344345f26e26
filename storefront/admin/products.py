"""Admin product management."""
import logging
from typing import List

from storefront.auth.session import CredentialStore
from storefront.catalog.models import Product
from storefront.errors import ERROR_PRODUCT_NOT_FOUND, AuthMissingError, PermissionDeniedError
from storefront.logging import sanitize_id_for_logging
from storefront.models import ProductPatch, ProductPayload
from storefront.services.http import ApiClient

logger = logging.getLogger(__name__)


def require_admin(credentials: CredentialStore) -> str:
    """Return the admin's token or raise before any request is sent."""
    token = credentials.valid_token()
    if token is None:
        raise AuthMissingError()
    if not credentials.is_admin():
        raise PermissionDeniedError()
    return token


class ProductAdminService:
    def __init__(self, api: ApiClient, credentials: CredentialStore):
        self.api = api
        self.credentials = credentials

    async def list_all(self) -> List[Product]:
        """Every product, including ones hidden from the public listing."""
        response = await self.api.get("/products/all", token=require_admin(self.credentials))
        return [Product.from_dict(row) for row in response.json()]

    async def create(self, payload: ProductPayload) -> Product:
        response = await self.api.post(
            "/products",
            token=require_admin(self.credentials),
            json=payload.model_dump(by_alias=True),
        )
        product = Product.from_dict(response.json())
        logger.info("Product %s created", sanitize_id_for_logging(product.id))
        return product

    async def update(self, product_id: int, patch: ProductPatch) -> Product:
        response = await self.api.put(
            f"/products/{product_id}",
            token=require_admin(self.credentials),
            json=patch.model_dump(by_alias=True, exclude_none=True),
            not_found=ERROR_PRODUCT_NOT_FOUND,
        )
        return Product.from_dict(response.json())

    async def delete(self, product_id: int) -> None:
        await self.api.delete(
            f"/products/{product_id}",
            token=require_admin(self.credentials),
            not_found=ERROR_PRODUCT_NOT_FOUND,
        )
        logger.info("Product %s deleted", sanitize_id_for_logging(product_id))
