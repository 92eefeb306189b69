"""Domain models for the photo album."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class AlbumRole(Enum):
    """Membership roles on an album."""

    OWNER = "owner"
    EDITOR = "editor"
    VIEWER = "viewer"


DELETE_ROLES = frozenset({AlbumRole.OWNER, AlbumRole.EDITOR})


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller resolved from a bearer token."""

    user_id: UUID
    email: str | None = None


@dataclass(frozen=True)
class PhotoRecord:
    """Metadata row for an uploaded object."""

    id: UUID
    object_key: str
    user_id: UUID | None
    album_id: UUID | None = None
    file_name: str | None = None
    description: str | None = None
    created_at: datetime | None = None
