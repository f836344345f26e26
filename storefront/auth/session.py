"""Client-side session state: the stored credential and forced logout."""
import logging
from typing import Any, Callable, Optional
from urllib.parse import quote

from pydantic import BaseModel

from .token import TokenValidator

logger = logging.getLogger(__name__)

ADMIN_ROLE = "ADMIN"


class AuthUser(BaseModel):
    """User record returned by /auth/login."""
    id: int
    name: str
    email: str
    role: str = "USER"

    @property
    def is_admin(self) -> bool:
        return self.role.upper() == ADMIN_ROLE


class CredentialStore:
    """
    Holds the bearer token and the logged-in user for one client session.

    Replaces browser storage; one instance is shared by every service
    acting on behalf of the same user.
    """

    def __init__(self, validator: TokenValidator | None = None):
        self.validator = validator or TokenValidator()
        self._token: Optional[str] = None
        self._user: Optional[AuthUser] = None

    @property
    def token(self) -> Optional[str]:
        """Raw stored token, unchecked."""
        return self._token

    @property
    def user(self) -> Optional[AuthUser]:
        return self._user

    def set(self, token: str, user: AuthUser | dict[str, Any] | None = None) -> None:
        self._token = token
        if isinstance(user, dict):
            user = AuthUser.model_validate(user)
        self._user = user

    def clear(self) -> None:
        self._token = None
        self._user = None

    def valid_token(self) -> Optional[str]:
        """
        Return the token if it is present and unexpired.

        An expired or undecodable token is purged along with the user.
        """
        if not self._token:
            return None
        if not self.validator.is_valid(self._token):
            logger.info("Stored token is expired or malformed, clearing session")
            self.clear()
            return None
        return self._token

    def is_authenticated(self) -> bool:
        return self.valid_token() is not None

    def is_admin(self) -> bool:
        return self.is_authenticated() and self._user is not None and self._user.is_admin


RedirectHandler = Callable[[str], None]


def login_redirect_url(current_path: str, login_path: str = "/login") -> str:
    """Build `/login?returnUrl=<path>` with the path percent-encoded."""
    return f"{login_path}?returnUrl={quote(current_path, safe='')}"


class SessionInvalidator:
    """
    Forced logout: clears the credential store and sends the user to login.

    `redirect` receives the full login URL including the return path; with
    no handler the URL is only logged.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        redirect: RedirectHandler | None = None,
        login_path: str = "/login",
    ):
        self.credentials = credentials
        self.redirect = redirect
        self.login_path = login_path
        self.current_path = "/"

    def invalidate(self, current_path: str | None = None) -> str:
        self.credentials.clear()
        url = login_redirect_url(current_path or self.current_path, self.login_path)
        logger.info("Session invalidated, redirecting to %s", url)
        if self.redirect is not None:
            self.redirect(url)
        return url
