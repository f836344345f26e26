"""Bearer token inspection.

The client never holds the issuer's signing key, so tokens are decoded
without signature verification and only the expiry claim is checked.
The server remains the authority: a token that passes here can still
be rejected with 401.
"""
import logging
import time
from typing import Any, Callable, Optional

import jwt

logger = logging.getLogger(__name__)


class TokenValidator:
    """Decodes JWTs and checks their `exp` claim."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock

    def decode(self, token: str) -> Optional[dict[str, Any]]:
        """Return the token's claims, or None if it is not a JWT."""
        try:
            return jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError as e:
            logger.debug("Undecodable token: %s", e)
            return None

    def expires_at(self, token: str) -> Optional[float]:
        claims = self.decode(token)
        if not claims:
            return None
        exp = claims.get("exp")
        if not isinstance(exp, (int, float)):
            return None
        return float(exp)

    def is_valid(self, token: Optional[str]) -> bool:
        """True if the token decodes and has not expired yet."""
        if not token:
            return False
        exp = self.expires_at(token)
        if exp is None:
            return False
        return exp > self._clock()


def is_token_expired(token: Optional[str]) -> bool:
    """Convenience wrapper: missing, malformed or expired tokens count as expired."""
    return not TokenValidator().is_valid(token)
