"""
Cart state container.

Keeps a local mirror of the user's server-side cart. Mutations are sent to
the API first and applied locally once the response confirms them; the
local copy is not re-fetched afterwards. Concurrent calls are not
serialized, so the last response to arrive wins.
"""
import logging
from decimal import Decimal
from typing import Callable, List, Optional

from storefront.auth.session import CredentialStore, SessionInvalidator
from storefront.errors import (
    ERROR_CART_FETCH_FAILED,
    ERROR_CART_ITEM_NOT_FOUND,
    ERROR_CART_REMOVE_FAILED,
    ERROR_CART_UPDATE_FAILED,
    AuthError,
    InsufficientStockError,
    NotFoundError,
    StorefrontError,
    ValidationError,
)
from storefront.logging import sanitize_id_for_logging

from .models import CartLine, CartStatus
from .service import CartService

logger = logging.getLogger(__name__)

Listener = Callable[["CartStore"], None]


class CartStore:
    """
    Observable cart for one authenticated user.

    Authentication failures are handled here: the session is invalidated
    and the operation returns quietly. Stock and not-found failures are
    raised to the caller.
    """

    def __init__(
        self,
        service: CartService,
        credentials: CredentialStore,
        invalidator: SessionInvalidator,
    ):
        self.service = service
        self.credentials = credentials
        self.invalidator = invalidator

        self._lines: dict[int, CartLine] = {}
        self.is_loading = False
        self.error: Optional[str] = None
        self.status = CartStatus.IDLE
        self._listeners: List[Listener] = []

    # ==================== OBSERVATION ====================

    @property
    def items(self) -> List[CartLine]:
        """Lines in insertion order."""
        return list(self._lines.values())

    def get_line(self, product_id: int) -> Optional[CartLine]:
        return self._lines.get(product_id)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(store)` after every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Cart listener failed")

    def _begin(self) -> None:
        self.is_loading = True
        self.error = None
        self.status = CartStatus.LOADING
        self._notify()

    def _finish(self, error: Optional[str] = None) -> None:
        self.is_loading = False
        self.error = error
        self.status = CartStatus.ERRORED if error else CartStatus.POPULATED
        self._notify()

    # ==================== SESSION ====================

    def _require_token(self) -> Optional[str]:
        """Current token, or None after invalidating the session."""
        token = self.credentials.valid_token()
        if token is None:
            self.invalidator.invalidate()
        return token

    def _reset(self) -> None:
        self._lines = {}
        self.is_loading = False
        self.error = None
        self.status = CartStatus.IDLE
        self._notify()

    def _drop_session(self) -> None:
        self.invalidator.invalidate()
        self._reset()

    # ==================== OPERATIONS ====================

    async def fetch_items(self) -> List[CartLine]:
        """Replace the local cart with the server's snapshot."""
        token = self._require_token()
        if token is None:
            self._reset()
            return []

        self._begin()
        try:
            lines = await self.service.fetch_items(token)
        except AuthError as e:
            logger.warning("Authentication error while fetching cart: %s", e.message)
            self._drop_session()
            return []
        except StorefrontError as e:
            logger.error("Error fetching cart items: %s", e.message)
            self._finish(error=ERROR_CART_FETCH_FAILED)
            return self.items

        self._lines = {line.id: line for line in lines}
        self._finish()
        return self.items

    async def add_to_cart(self, product_id: int, quantity: int) -> None:
        """
        Add `quantity` units, merging into an existing line.

        Raises:
            ValidationError: quantity below 1
            InsufficientStockError: product stock is below `quantity`
            NotFoundError: unknown product
            ApiError: network or server failure
        """
        if quantity < 1:
            raise ValidationError("quantity must be at least 1")

        token = self._require_token()
        if token is None:
            return

        self._begin()
        try:
            product = await self.service.get_product(product_id, token)
            if not product.has_stock(quantity):
                raise InsufficientStockError(product_id, quantity, product.stock)
            response = await self.service.add_item(token, product_id, quantity)
        except AuthError:
            self._drop_session()
            return
        except (InsufficientStockError, NotFoundError) as e:
            logger.info(
                "Cannot add product %s to cart: %s",
                sanitize_id_for_logging(product_id),
                e.message,
            )
            self._finish()
            raise
        except StorefrontError as e:
            logger.error("Failed to add item to cart: %s", e.message)
            self._finish(error=e.message)
            raise

        if response.status_code == 201:
            existing = self._lines.get(product_id)
            if existing is not None:
                self._lines[product_id] = existing.with_quantity(existing.quantity + quantity)
            else:
                self._lines[product_id] = CartLine.from_product(product, quantity)
        self._finish()

    async def update_quantity(self, product_id: int, quantity: int) -> None:
        """
        Set a line's quantity to exactly `quantity`.

        Raises:
            ValidationError: quantity below 1 (remove the line instead)
            NotFoundError: the server has no such cart item
        """
        if quantity < 1:
            raise ValidationError("quantity must be at least 1")

        token = self._require_token()
        if token is None:
            return

        self._begin()
        try:
            response = await self.service.update_item(token, product_id, quantity)
        except AuthError:
            self._drop_session()
            return
        except NotFoundError as e:
            logger.error("%s: %s", ERROR_CART_ITEM_NOT_FOUND, e.message)
            self._finish()
            raise
        except StorefrontError as e:
            logger.error("%s: %s", ERROR_CART_UPDATE_FAILED, e.message)
            self._finish(error=ERROR_CART_UPDATE_FAILED)
            return

        if response.status_code == 200 and product_id in self._lines:
            self._lines[product_id] = self._lines[product_id].with_quantity(quantity)
        self._finish()

    async def remove_from_cart(self, product_id: int) -> None:
        """Delete a line remotely, then locally. Unknown ids leave local state unchanged."""
        token = self._require_token()
        if token is None:
            return

        self._begin()
        try:
            response = await self.service.delete_item(token, product_id)
        except AuthError:
            self._drop_session()
            return
        except NotFoundError as e:
            logger.error("%s: %s", ERROR_CART_ITEM_NOT_FOUND, e.message)
            self._finish()
            raise
        except StorefrontError as e:
            logger.error("%s: %s", ERROR_CART_REMOVE_FAILED, e.message)
            self._finish(error=ERROR_CART_REMOVE_FAILED)
            return

        if response.status_code == 200:
            self._lines.pop(product_id, None)
        self._finish()

    def clear_cart(self) -> None:
        """Empty the local cart without calling the API (the server already consumed it)."""
        self._reset()

    # ==================== TOTALS ====================

    def get_total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def get_total_price(self) -> Decimal:
        return sum((line.total_price for line in self._lines.values()), Decimal("0"))
