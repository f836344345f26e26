"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum

from storefront.catalog.models import Product
from storefront.services.money import multiply, to_decimal, to_float


class CartStatus(str, Enum):
    """Lifecycle of a CartStore."""
    IDLE = "idle"
    LOADING = "loading"
    POPULATED = "populated"
    ERRORED = "errored"


@dataclass(frozen=True)
class CartLine:
    """One product in the cart together with its quantity."""
    id: int
    name: str
    unit_price: Decimal
    quantity: int
    stock: int = 0
    category_id: int = 0
    description: str = ""

    def __post_init__(self):
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "unit_price", to_decimal(self.unit_price))
        if self.quantity < 1:
            raise ValueError(f"cart line quantity must be >= 1, got {self.quantity}")

    @property
    def total_price(self) -> Decimal:
        """unit price x quantity."""
        return multiply(self.unit_price, self.quantity)

    def with_quantity(self, quantity: int) -> "CartLine":
        return replace(self, quantity=quantity)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": to_float(self.unit_price),
            "stock": self.stock,
            "categoryId": self.category_id,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLine":
        """Parse a /cart/my-cart row; price may be a string or a number."""
        return cls(
            id=int(data["id"]),
            name=data.get("name") or "",
            description=data.get("description") or "",
            unit_price=to_decimal(data.get("price")),
            stock=int(data.get("stock") or 0),
            category_id=int(data.get("categoryId") or 0),
            quantity=int(data["quantity"]),
        )

    @classmethod
    def from_product(cls, product: Product, quantity: int) -> "CartLine":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            unit_price=product.price,
            stock=product.stock,
            category_id=product.category_id,
            quantity=quantity,
        )
