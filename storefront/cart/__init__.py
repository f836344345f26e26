"""Cart package: models, remote service and the local state store."""
from .models import CartLine, CartStatus
from .service import CartService
from .store import CartStore

__all__ = [
    "CartLine",
    "CartStatus",
    "CartService",
    "CartStore",
]
