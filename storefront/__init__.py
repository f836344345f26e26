"""
Storefront client.

Subpackages:
- auth: token validation, credential store, login/logout
- cart: cart models, remote cart API and the local CartStore
- catalog: products
- orders: order history and checkout
- admin: product and order management
- services: HTTP transport and money helpers

`build_client()` wires the pieces together for one user session.
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .logging import configure_logging

if TYPE_CHECKING:
    from .admin import OrderAdminService, ProductAdminService
    from .auth import AuthService, CredentialStore, SessionInvalidator
    from .auth.session import RedirectHandler
    from .cart import CartStore
    from .catalog import ProductService
    from .config import Settings
    from .orders import CheckoutFlow, OrderService
    from .services.http import ApiClient

__all__ = ["StorefrontClient", "build_client"]


@dataclass
class StorefrontClient:
    """All services for one session, sharing a transport and a credential store."""
    api: "ApiClient"
    credentials: "CredentialStore"
    invalidator: "SessionInvalidator"
    auth: "AuthService"
    products: "ProductService"
    cart: "CartStore"
    orders: "OrderService"
    checkout: "CheckoutFlow"
    product_admin: "ProductAdminService"
    order_admin: "OrderAdminService"

    async def close(self) -> None:
        await self.api.close()


def build_client(
    settings: Optional["Settings"] = None,
    redirect: Optional["RedirectHandler"] = None,
    transport=None,
) -> StorefrontClient:
    """Create a fully wired client. `redirect` receives login URLs on forced logout."""
    from .admin import OrderAdminService, ProductAdminService
    from .auth import AuthService, CredentialStore, SessionInvalidator
    from .cart import CartService, CartStore
    from .catalog import ProductService
    from .config import get_settings
    from .orders import CheckoutFlow, OrderService
    from .services.http import ApiClient

    configure_logging()
    settings = settings or get_settings()

    api = ApiClient(settings, transport=transport)
    credentials = CredentialStore()
    invalidator = SessionInvalidator(credentials, redirect, login_path=settings.login_path)
    cart = CartStore(CartService(api), credentials, invalidator)
    orders = OrderService(api, credentials)

    return StorefrontClient(
        api=api,
        credentials=credentials,
        invalidator=invalidator,
        auth=AuthService(api, credentials, cart=cart),
        products=ProductService(api),
        cart=cart,
        orders=orders,
        checkout=CheckoutFlow(orders, cart),
        product_admin=ProductAdminService(api, credentials),
        order_admin=OrderAdminService(api, credentials),
    )
