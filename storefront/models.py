"""
Request payload schemas.

Field aliases carry the API's camelCase names; dump with
`model_dump(by_alias=True)` before sending.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ==================== AUTH ====================

class LoginRequest(_Payload):
    email: str
    password: str


class SignupRequest(_Payload):
    name: str
    email: str
    password: str


class LogoutRequest(_Payload):
    access_token: str


# ==================== CART ====================

class AddToCartRequest(_Payload):
    product_id: int = Field(alias="productId")
    quantity: int = Field(default=1, ge=1)


class UpdateCartItemRequest(_Payload):
    quantity: int = Field(ge=1)


# ==================== ORDERS ====================

class ConfirmOrderRequest(_Payload):
    shipping_address: str = Field(alias="shippingAddress")

    @field_validator("shipping_address")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("shipping address must not be blank")
        return value


class UpdateOrderStatusRequest(_Payload):
    status: str


# ==================== USERS ====================

class ProfileUpdateRequest(_Payload):
    name: str
    email: str
    # Omitted from the body when empty: the server keeps the current password
    password: Optional[str] = None


# ==================== PRODUCTS (ADMIN) ====================

PRODUCT_NAME_MIN_LENGTH = 3
PRODUCT_DESCRIPTION_MIN_LENGTH = 10


def _min_trimmed(value: Optional[str], minimum: int, field: str) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if len(value) < minimum:
        raise ValueError(f"{field} must be at least {minimum} characters")
    return value


class ProductPayload(_Payload):
    name: str
    description: str
    price: float = Field(gt=0)
    stock: int = Field(ge=0)
    category_id: int = Field(alias="categoryId", ge=1)

    @field_validator("name")
    @classmethod
    def _name_length(cls, value: str) -> str:
        return _min_trimmed(value, PRODUCT_NAME_MIN_LENGTH, "name")

    @field_validator("description")
    @classmethod
    def _description_length(cls, value: str) -> str:
        return _min_trimmed(value, PRODUCT_DESCRIPTION_MIN_LENGTH, "description")


class ProductPatch(_Payload):
    """Partial update; unset fields are left out of the request body."""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, gt=0)
    stock: Optional[int] = Field(default=None, ge=0)
    category_id: Optional[int] = Field(default=None, alias="categoryId", ge=1)

    @field_validator("name")
    @classmethod
    def _name_length(cls, value: Optional[str]) -> Optional[str]:
        return _min_trimmed(value, PRODUCT_NAME_MIN_LENGTH, "name")

    @field_validator("description")
    @classmethod
    def _description_length(cls, value: Optional[str]) -> Optional[str]:
        return _min_trimmed(value, PRODUCT_DESCRIPTION_MIN_LENGTH, "description")
