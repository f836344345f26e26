"""Order models."""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List

from storefront.services.money import multiply, to_decimal


class OrderStatus(str, Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value: str) -> "OrderStatus":
        """Case-insensitive lookup by value."""
        for status in cls:
            if status.value.lower() == str(value).lower():
                return status
        raise ValueError(f"Unknown order status: {value!r}")


@dataclass
class OrderItem:
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: Decimal

    def __post_init__(self):
        self.price = to_decimal(self.price)

    @property
    def total_price(self) -> Decimal:
        return multiply(self.price, self.quantity)

    @classmethod
    def from_dict(cls, data: dict) -> "OrderItem":
        return cls(
            id=int(data["id"]),
            order_id=int(data.get("orderId") or 0),
            product_id=int(data["productId"]),
            quantity=int(data["quantity"]),
            price=to_decimal(data.get("price")),
        )


@dataclass
class Order:
    id: int
    user_id: int
    status: OrderStatus
    total_price: Decimal
    shipping_address: str = ""
    created_at: str = ""
    products_id: List[int] = field(default_factory=list)
    order_items: List[OrderItem] = field(default_factory=list)

    def __post_init__(self):
        self.total_price = to_decimal(self.total_price)

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.order_items)

    @classmethod
    def from_dict(cls, data: dict) -> "Order":
        return cls(
            id=int(data["id"]),
            user_id=int(data.get("userId") or 0),
            status=OrderStatus.parse(data.get("status") or OrderStatus.PENDING.value),
            total_price=to_decimal(data.get("totalPrice")),
            shipping_address=data.get("shippingAddress") or "",
            created_at=data.get("createdAt") or "",
            products_id=[int(pid) for pid in data.get("productsId") or []],
            order_items=[OrderItem.from_dict(item) for item in data.get("orderItems") or []],
        )
