"""Admin console operations."""
from .orders import OrderAdminService
from .products import ProductAdminService, require_admin

__all__ = ["OrderAdminService", "ProductAdminService", "require_admin"]
