"""
Storefront client errors.

Message constants are shared so the same text reaches logs and callers.
"""

# Auth errors
ERROR_UNAUTHORIZED = "Unauthorized"
ERROR_TOKEN_MISSING = "Authentication required"
ERROR_TOKEN_EXPIRED = "Session expired"
ERROR_ADMIN_REQUIRED = "Admin access required"

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_INSUFFICIENT_STOCK = "Not enough stock available"

# Cart errors
ERROR_CART_ITEM_NOT_FOUND = "Cart item not found"
ERROR_CART_FETCH_FAILED = "Failed to fetch cart items"
ERROR_CART_UPDATE_FAILED = "Failed to update cart item quantity"
ERROR_CART_REMOVE_FAILED = "Failed to remove cart item"

# Order errors
ERROR_ORDER_NOT_FOUND = "Order not found"
ERROR_SHIPPING_ADDRESS_REQUIRED = "Please enter a shipping address"

# Generic errors
ERROR_MALFORMED_RESPONSE = "Unexpected response from server"
ERROR_NOT_FOUND = "Not found"
ERROR_NETWORK = "Network error"
ERROR_UNEXPECTED = "An error occurred"


class StorefrontError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str = ERROR_UNEXPECTED):
        super().__init__(message)
        self.message = message


class AuthError(StorefrontError):
    """The stored credential cannot be used."""


class AuthMissingError(AuthError):
    def __init__(self, message: str = ERROR_TOKEN_MISSING):
        super().__init__(message)


class AuthExpiredError(AuthError):
    def __init__(self, message: str = ERROR_TOKEN_EXPIRED):
        super().__init__(message)


class PermissionDeniedError(StorefrontError):
    def __init__(self, message: str = ERROR_ADMIN_REQUIRED):
        super().__init__(message)


class NotFoundError(StorefrontError):
    def __init__(self, message: str = ERROR_NOT_FOUND):
        super().__init__(message)


class InsufficientStockError(StorefrontError):
    """Requested quantity exceeds the product's stock snapshot."""

    def __init__(self, product_id: int, requested: int, available: int):
        super().__init__(ERROR_INSUFFICIENT_STOCK)
        self.product_id = product_id
        self.requested = requested
        self.available = available


class ValidationError(StorefrontError):
    """Input rejected before any request was made."""


class ApiError(StorefrontError):
    """Network failure or an unexpected server response."""

    def __init__(self, message: str = ERROR_UNEXPECTED, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
