"""Delete permission checks against the metadata store."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from photo_album.domain.errors import AuthorizationError, InternalError, NotFoundError
from photo_album.domain.models import (
    DELETE_ROLES,
    AlbumRole,
    CallerIdentity,
    PhotoRecord,
)


class PhotoLookupRepository(Protocol):
    """Read-only view of photos and album memberships."""

    def find_by_object_key(self, object_key: str) -> list[PhotoRecord]:
        """Return every photo whose stored key equals ``object_key`` exactly."""

    def get_member_role(self, album_id: UUID, user_id: UUID) -> str | None:
        """Return the raw role of a user on an album, if any."""


@dataclass(frozen=True)
class AuthorizationDecision:
    """Outcome of a permission check with the resolved record."""

    allowed: bool
    record: PhotoRecord
    reason: str


@dataclass
class Authorizer:
    """Decides whether a caller may delete a stored object."""

    repository: PhotoLookupRepository

    def authorize(
        self, object_key: str, caller: CallerIdentity
    ) -> AuthorizationDecision:
        """Resolve the record and apply the uploader/owner/editor rule."""
        matches = self.repository.find_by_object_key(object_key)
        if not matches:
            raise NotFoundError("No photo record found for this object")
        if len(matches) > 1:
            raise InternalError("Authorization check failed")
        record = matches[0]

        if record.user_id == caller.user_id:
            return AuthorizationDecision(True, record, "uploader")

        if record.album_id is not None:
            role = _parse_role(
                self.repository.get_member_role(record.album_id, caller.user_id)
            )
            if role in DELETE_ROLES:
                return AuthorizationDecision(True, record, f"album {role.value}")

        return AuthorizationDecision(False, record, "not uploader or album editor")

    def require(self, object_key: str, caller: CallerIdentity) -> PhotoRecord:
        """Return the record when authorized, otherwise raise."""
        decision = self.authorize(object_key, caller)
        if not decision.allowed:
            raise AuthorizationError("Not allowed to delete this file")
        return decision.record


def _parse_role(raw: str | None) -> AlbumRole | None:
    if raw is None:
        return None
    try:
        return AlbumRole(raw)
    except ValueError:
        return None
