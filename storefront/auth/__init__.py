"""Authentication package."""
from .token import TokenValidator, is_token_expired
from .session import AuthUser, CredentialStore, SessionInvalidator, login_redirect_url
from .service import AuthService

__all__ = [
    "TokenValidator",
    "is_token_expired",
    "AuthUser",
    "CredentialStore",
    "SessionInvalidator",
    "login_redirect_url",
    "AuthService",
]
