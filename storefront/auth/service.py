"""Login, signup, logout and profile updates against the storefront API."""
import logging
from typing import TYPE_CHECKING, Any, Optional

from storefront.errors import ApiError, AuthMissingError, StorefrontError
from storefront.logging import sanitize_id_for_logging
from storefront.models import LoginRequest, LogoutRequest, ProfileUpdateRequest, SignupRequest
from storefront.services.http import ApiClient

from .session import AuthUser, CredentialStore

if TYPE_CHECKING:
    from storefront.cart.store import CartStore

logger = logging.getLogger(__name__)


class AuthService:
    """Authenticates a user and keeps the resulting credential in a CredentialStore."""

    def __init__(
        self,
        api: ApiClient,
        credentials: CredentialStore,
        cart: Optional["CartStore"] = None,
    ):
        self.api = api
        self.credentials = credentials
        self.cart = cart

    async def login(self, email: str, password: str) -> AuthUser:
        payload = LoginRequest(email=email, password=password)
        response = await self.api.post("/auth/login", json=payload.model_dump())
        data = response.json()

        token = data.get("access_token")
        if not token:
            raise ApiError("Login response did not contain an access token")
        user = AuthUser.model_validate(data["user"])

        self.credentials.set(token, user)
        logger.info("User %s logged in", sanitize_id_for_logging(user.id))
        return user

    async def signup(self, name: str, email: str, password: str) -> dict[str, Any]:
        payload = SignupRequest(name=name, email=email, password=password)
        response = await self.api.post("/users/signup", json=payload.model_dump())
        return response.json()

    async def update_profile(self, name: str, email: str, password: Optional[str] = None) -> AuthUser:
        """
        PUT /users/{id} for the logged-in user.

        An empty password is not sent. The stored user picks up the new
        name and email once the server accepts them.
        """
        token = self.credentials.valid_token()
        user = self.credentials.user
        if token is None or user is None:
            raise AuthMissingError()

        payload = ProfileUpdateRequest(name=name, email=email, password=password or None)
        await self.api.put(f"/users/{user.id}", token=token, json=payload.model_dump(exclude_none=True))

        updated = user.model_copy(update={"name": name, "email": email})
        self.credentials.set(token, updated)
        logger.info("Profile updated for user %s", sanitize_id_for_logging(user.id))
        return updated

    async def logout(self) -> None:
        """Tell the server to drop the token, then clear local state regardless of the outcome."""
        token = self.credentials.token
        try:
            if token:
                await self.api.post(
                    "/auth/logout",
                    token=token,
                    json=LogoutRequest(access_token=token).model_dump(),
                )
        except StorefrontError as e:
            logger.warning("Logout request failed: %s", e.message)
        finally:
            self.credentials.clear()
            if self.cart is not None:
                self.cart.clear_cart()

    def is_admin(self) -> bool:
        return self.credentials.is_admin()
