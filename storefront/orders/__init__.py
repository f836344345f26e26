"""Orders: models, order history and checkout."""
from .models import Order, OrderItem, OrderStatus
from .service import CheckoutFlow, OrderService

__all__ = [
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderService",
    "CheckoutFlow",
]
