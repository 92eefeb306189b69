"""Supabase Auth identity provider."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client, create_client

from photo_album.domain.errors import AuthenticationError
from photo_album.domain.models import CallerIdentity
from photo_album.services.deletion import IdentityProvider

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Resolves callers through Supabase Auth with the public anon key.

    The anon client is not elevated, so identity resolution follows the same
    access rules as the caller's own session.
    """

    client: Client

    @classmethod
    def create(cls, supabase_url: str, anon_key: str) -> "SupabaseIdentityProvider":
        """Create a provider backed by an anon-key Supabase client."""
        return cls(client=create_client(supabase_url, anon_key))

    def get_caller(self, access_token: str) -> CallerIdentity:
        """Exchange an access token for the caller identity."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as exc:
            _logger.warning("Supabase rejected access token: %s", type(exc).__name__)
            raise AuthenticationError("Authentication failed, please sign in") from exc
        user = response.user if response else None
        if user is None:
            raise AuthenticationError("Authentication failed, please sign in")
        return CallerIdentity(user_id=UUID(str(user.id)), email=user.email)
