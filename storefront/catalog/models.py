"""Product model."""
from dataclasses import dataclass
from decimal import Decimal

from storefront.services.money import to_decimal, to_float


@dataclass
class Product:
    """Product snapshot as served by /products."""
    id: int
    name: str
    price: Decimal
    stock: int
    category_id: int
    description: str = ""

    def __post_init__(self):
        self.price = to_decimal(self.price)

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": to_float(self.price),
            "stock": self.stock,
            "categoryId": self.category_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        return cls(
            id=int(data["id"]),
            name=data["name"],
            description=data.get("description") or "",
            price=to_decimal(data.get("price")),
            stock=int(data.get("stock") or 0),
            category_id=int(data.get("categoryId") or 0),
        )
