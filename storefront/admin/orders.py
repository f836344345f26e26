"""Admin order management."""
import logging
from typing import List

from storefront.auth.session import CredentialStore
from storefront.errors import ERROR_ORDER_NOT_FOUND
from storefront.logging import sanitize_id_for_logging
from storefront.models import UpdateOrderStatusRequest
from storefront.orders.models import Order, OrderStatus
from storefront.services.http import ApiClient

from .products import require_admin

logger = logging.getLogger(__name__)


class OrderAdminService:
    def __init__(self, api: ApiClient, credentials: CredentialStore):
        self.api = api
        self.credentials = credentials

    async def list_orders(self) -> List[Order]:
        response = await self.api.get("/orders", token=require_admin(self.credentials))
        return [Order.from_dict(row) for row in response.json()]

    async def update_status(self, order_id: int, status: OrderStatus | str) -> None:
        if not isinstance(status, OrderStatus):
            status = OrderStatus.parse(status)
        await self.api.put(
            f"/orders/{order_id}",
            token=require_admin(self.credentials),
            json=UpdateOrderStatusRequest(status=status.value).model_dump(),
            not_found=ERROR_ORDER_NOT_FOUND,
        )
        logger.info(
            "Order %s status set to %s",
            sanitize_id_for_logging(order_id),
            status.value,
        )
