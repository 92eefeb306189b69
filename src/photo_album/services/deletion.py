"""Authorized deletion of stored objects.

A request moves through validate, authenticate, authorize, remote delete and
local delete. The metadata row is only removed after the object store has
confirmed the delete, so a partial failure leaves "remote gone, row stale"
and never an orphaned object that the UI can no longer reach.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from urllib.parse import quote
from uuid import UUID

from photo_album.config import ObjectStoreConfig
from photo_album.domain.deletion import DeletionOutcome, DeletionStatus
from photo_album.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    GatewayError,
    InternalError,
    RemoteStoreError,
)
from photo_album.domain.models import CallerIdentity, PhotoRecord
from photo_album.services.authorization import Authorizer
from photo_album.services.object_keys import validate_object_key
from photo_album.services.signing import (
    authorization_header,
    canonicalized_resource,
    http_date,
    sign_request,
)

_logger = logging.getLogger(__name__)

SUCCESS_STATUSES = frozenset({200, 204})
DETAIL_LIMIT = 200
DEGRADED_WARNING = "Object deleted, but removing the photo record failed"


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class IdentityProvider(Protocol):
    """Exchanges a caller's bearer token for an identity."""

    def get_caller(self, access_token: str) -> CallerIdentity:
        """Return the caller or raise ``AuthenticationError``."""


class PhotoRepository(Protocol):
    """Write access to photo metadata."""

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo row by primary id."""


@dataclass(frozen=True)
class RemoteResponse:
    """Status and body returned by the object store."""

    status_code: int
    body: str


class ObjectStoreTransport(Protocol):
    """Sends signed requests to the object store."""

    async def delete(
        self, url: str, headers: dict[str, str], timeout: float
    ) -> RemoteResponse:
        """Issue a DELETE and return the raw response."""


@dataclass
class DeletionService:
    """Gateway handler owning one deletion request end to end."""

    identity_provider: IdentityProvider
    authorizer: Authorizer
    photo_repository: PhotoRepository
    transport: ObjectStoreTransport
    object_store: ObjectStoreConfig | None
    clock: Callable[[], datetime] = _utc_now

    async def delete_object(
        self, authorization: str | None, object_name: object
    ) -> DeletionOutcome:
        """Run the full deletion flow for a single request."""
        try:
            object_key = validate_object_key(object_name)
        except GatewayError as exc:
            _logger.info("Deletion rejected: %s", exc.message)
            raise

        try:
            caller = self.authenticate(authorization)
            record = self._authorize(object_key, caller)
        except GatewayError as exc:
            _logger.info(
                "Deletion rejected: %s",
                exc.message,
                extra={"object_key": object_key, "status": exc.status_code},
            )
            raise

        await self._delete_remote(object_key)
        return self._delete_local(object_key, record, caller)

    def authenticate(self, authorization: str | None) -> CallerIdentity:
        """Resolve the caller from an ``Authorization: Bearer`` header."""
        if not authorization or not authorization.startswith("Bearer "):
            raise AuthenticationError("Missing or invalid Authorization header")
        token = authorization[len("Bearer ") :].strip()
        if not token:
            raise AuthenticationError("Missing or invalid Authorization header")
        return self.identity_provider.get_caller(token)

    def _authorize(self, object_key: str, caller: CallerIdentity) -> PhotoRecord:
        try:
            return self.authorizer.require(object_key, caller)
        except GatewayError:
            raise
        except Exception as exc:
            _logger.exception("Photo lookup failed", extra={"object_key": object_key})
            raise InternalError("Authorization check failed") from exc

    async def _delete_remote(self, object_key: str) -> None:
        config = self.object_store
        if config is None:
            _logger.error("Object store is not configured")
            raise ConfigurationError("Object storage is not configured")

        path = object_key.lstrip("/")
        date = http_date(self.clock())
        signature = sign_request(
            config.access_key_secret,
            "DELETE",
            "",
            "",
            date,
            canonicalized_resource(config.bucket, path),
        )
        url = f"https://{config.host}/{quote(path, safe='/~')}"
        headers = {
            "Host": config.host,
            "Date": date,
            "Authorization": authorization_header(config.access_key_id, signature),
        }

        try:
            response = await self.transport.delete(
                url, headers, timeout=config.timeout_seconds
            )
        except RemoteStoreError as exc:
            _logger.error(
                "Object store DELETE failed: %s",
                exc.detail,
                extra={"object_key": object_key},
            )
            raise

        if response.status_code not in SUCCESS_STATUSES:
            _logger.error(
                "Object store DELETE failed: status=%s body=%s",
                response.status_code,
                response.body,
                extra={"object_key": object_key},
            )
            raise RemoteStoreError(
                "Object storage delete failed", detail=response.body[:DETAIL_LIMIT]
            )

    def _delete_local(
        self, object_key: str, record: PhotoRecord, caller: CallerIdentity
    ) -> DeletionOutcome:
        try:
            self.photo_repository.delete_photo(record.id)
        except Exception:
            _logger.exception(
                "Photo record delete failed after object removal: "
                "object_key=%s record_id=%s user_id=%s",
                object_key,
                record.id,
                caller.user_id,
            )
            return DeletionOutcome(
                status=DeletionStatus.DEGRADED,
                object_key=object_key,
                record_id=record.id,
                warning=DEGRADED_WARNING,
            )

        _logger.info(
            "Deleted object and photo record: object_key=%s record_id=%s user_id=%s",
            object_key,
            record.id,
            caller.user_id,
        )
        return DeletionOutcome(
            status=DeletionStatus.SUCCEEDED,
            object_key=object_key,
            record_id=record.id,
        )
