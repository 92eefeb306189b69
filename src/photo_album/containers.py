"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from photo_album.adapters.oss_client import HttpxObjectStoreTransport
from photo_album.adapters.supabase_identity_provider import SupabaseIdentityProvider
from photo_album.adapters.supabase_photo_repository import SupabasePhotoRepository
from photo_album.config import Settings
from photo_album.services.authorization import Authorizer
from photo_album.services.deletion import DeletionService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    deletion_service: DeletionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    service_key = resolved_settings.supabase_service_role_key
    if not service_key:
        _logger.warning(
            "SUPABASE_SERVICE_ROLE_KEY is not set; photo lookups use the anon key"
        )
        service_key = resolved_settings.supabase_anon_key
    admin_client = create_client(resolved_settings.supabase_url, service_key)
    photo_repository = SupabasePhotoRepository(admin_client)
    identity_provider = SupabaseIdentityProvider.create(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    transport = HttpxObjectStoreTransport.create()
    deletion_service = DeletionService(
        identity_provider=identity_provider,
        authorizer=Authorizer(photo_repository),
        photo_repository=photo_repository,
        transport=transport,
        object_store=resolved_settings.object_store(),
    )

    async def close_resources() -> None:
        await transport.close()

    return AppContainer(
        settings=resolved_settings,
        deletion_service=deletion_service,
        close_resources=close_resources,
    )
