"""Supabase-backed photo repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from photo_album.domain.models import PhotoRecord
from photo_album.services.authorization import PhotoLookupRepository
from photo_album.services.deletion import PhotoRepository

_PHOTO_COLUMNS = "id, album_id, user_id, oss_path, file_name, description, created_at"


@dataclass
class SupabasePhotoRepository(PhotoLookupRepository, PhotoRepository):
    """Supabase implementation for photo metadata and memberships.

    Expects a service-role client so lookups are not filtered by row-level
    security; it must never be handed to request-scoped code.
    """

    client: Client

    def find_by_object_key(self, object_key: str) -> list[PhotoRecord]:
        """Return photos whose stored key equals ``object_key`` exactly."""
        response = (
            self.client.table("photos")
            .select(_PHOTO_COLUMNS)
            .eq("oss_path", object_key)
            .limit(2)
            .execute()
        )
        return [_to_record(row) for row in response.data or []]

    def get_member_role(self, album_id: UUID, user_id: UUID) -> str | None:
        """Return the user's role on the album, if they are a member."""
        response = (
            self.client.table("album_members")
            .select("role")
            .eq("album_id", str(album_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            role = response.data[0].get("role")
            return role if isinstance(role, str) else None
        return None

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo metadata row."""
        self.client.table("photos").delete().eq("id", str(photo_id)).execute()


def _to_record(row: dict[str, object]) -> PhotoRecord:
    album_id = row.get("album_id")
    user_id = row.get("user_id")
    created_at = row.get("created_at")
    return PhotoRecord(
        id=UUID(str(row["id"])),
        object_key=str(row["oss_path"]),
        user_id=UUID(str(user_id)) if user_id else None,
        album_id=UUID(str(album_id)) if album_id else None,
        file_name=row.get("file_name"),
        description=row.get("description"),
        created_at=(
            datetime.fromisoformat(created_at)
            if isinstance(created_at, str) and created_at
            else None
        ),
    )
