"""Supabase Auth adapter for session resolution."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import AuthError, Client

from ai_fusion.domain.profiles import Identity
from ai_fusion.services.sessions import AuthClient

logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthClient(AuthClient):
    """Resolves Supabase access tokens to identities."""

    client: Client

    def get_identity(self, access_token: str) -> Identity | None:
        """Return the identity behind an access token, if the session is live."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError as exc:
            if _is_transport_failure(exc):
                raise
            logger.info("Supabase rejected access token: %s", exc)
            return None
        if response is None or response.user is None:
            return None
        return Identity(user_id=UUID(response.user.id), email=response.user.email)

    def sign_out(self, access_token: str) -> None:
        """Revoke the session via the auth admin API."""
        self.client.auth.admin.sign_out(access_token)


def _is_transport_failure(exc: AuthError) -> bool:
    # Network failures surface with status 0, provider outages with 5xx.
    status = getattr(exc, "status", None)
    return isinstance(status, int) and (status == 0 or status >= 500)
