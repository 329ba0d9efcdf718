"""Resolution of access tokens to authenticated identities."""

import logging
from dataclasses import dataclass
from typing import Protocol

from ai_fusion.domain.errors import AuthUnavailable
from ai_fusion.domain.profiles import Identity

logger = logging.getLogger(__name__)


class AuthClient(Protocol):
    """Interface for the external authentication provider."""

    def get_identity(self, access_token: str) -> Identity | None:
        """Return the identity for a live session, if any."""

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""


@dataclass
class SessionResolver:
    """Single-attempt session lookup for each request."""

    client: AuthClient

    def resolve(self, access_token: str | None) -> Identity | None:
        """Return the caller's identity, or None when unauthenticated."""
        if not access_token or not access_token.strip():
            return None
        try:
            return self.client.get_identity(access_token.strip())
        except Exception as exc:
            logger.exception("Auth provider lookup failed")
            raise AuthUnavailable() from exc

    def sign_out(self, access_token: str | None) -> bool:
        """Sign the session out; return False when there was none."""
        identity = self.resolve(access_token)
        if identity is None or access_token is None:
            return False
        self.client.sign_out(access_token.strip())
        logger.info("Signed out user %s", identity.user_id)
        return True
