"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from photo_album.config import ObjectStoreConfig, Settings
from photo_album.containers import AppContainer
from photo_album.domain.errors import AuthenticationError, RemoteStoreError
from photo_album.domain.models import CallerIdentity, PhotoRecord
from photo_album.services.authorization import Authorizer, PhotoLookupRepository
from photo_album.services.deletion import (
    DeletionService,
    IdentityProvider,
    ObjectStoreTransport,
    PhotoRepository,
    RemoteResponse,
)

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
UPLOADER_TOKEN = "uploader-token"
OWNER_TOKEN = "owner-token"
EDITOR_TOKEN = "editor-token"
VIEWER_TOKEN = "viewer-token"
STRANGER_TOKEN = "stranger-token"


@dataclass
class FakeIdentityProvider(IdentityProvider):
    """Identity provider resolving tokens from a fixed table."""

    callers: dict[str, CallerIdentity] = field(default_factory=dict)
    events: list[str] = field(default_factory=list)

    def get_caller(self, access_token: str) -> CallerIdentity:
        self.events.append("identity")
        caller = self.callers.get(access_token)
        if caller is None:
            raise AuthenticationError("Authentication failed, please sign in")
        return caller


@dataclass
class InMemoryPhotoRepository(PhotoLookupRepository, PhotoRepository):
    """In-memory photo and membership store for tests."""

    photos: dict[UUID, PhotoRecord] = field(default_factory=dict)
    roles: dict[tuple[UUID, UUID], str] = field(default_factory=dict)
    events: list[str] = field(default_factory=list)
    fail_delete: bool = False
    fail_lookup: bool = False

    def add_photo(
        self, object_key: str, user_id: UUID | None, album_id: UUID | None = None
    ) -> PhotoRecord:
        record = PhotoRecord(
            id=uuid4(), object_key=object_key, user_id=user_id, album_id=album_id
        )
        self.photos[record.id] = record
        return record

    def find_by_object_key(self, object_key: str) -> list[PhotoRecord]:
        self.events.append("lookup")
        if self.fail_lookup:
            raise RuntimeError("database unavailable")
        return [
            photo for photo in self.photos.values() if photo.object_key == object_key
        ]

    def get_member_role(self, album_id: UUID, user_id: UUID) -> str | None:
        self.events.append("role")
        return self.roles.get((album_id, user_id))

    def delete_photo(self, photo_id: UUID) -> None:
        self.events.append("local_delete")
        if self.fail_delete:
            raise RuntimeError("database unavailable")
        self.photos.pop(photo_id, None)


@dataclass
class FakeObjectStoreTransport(ObjectStoreTransport):
    """Object store double holding a set of keys under one bucket host."""

    objects: set[str] = field(default_factory=set)
    status_code: int | None = None
    body: str = ""
    error: RemoteStoreError | None = None
    requests: list[tuple[str, dict[str, str], float]] = field(default_factory=list)
    events: list[str] = field(default_factory=list)

    async def delete(
        self, url: str, headers: dict[str, str], timeout: float
    ) -> RemoteResponse:
        self.events.append("remote_delete")
        self.requests.append((url, headers, timeout))
        if self.error is not None:
            raise self.error
        if self.status_code is not None:
            return RemoteResponse(status_code=self.status_code, body=self.body)
        self.objects.discard(url.split("/", 3)[3])
        return RemoteResponse(status_code=204, body="")


@dataclass
class Scenario:
    """Album with an uploader, members and one uploaded photo."""

    album_id: UUID
    uploader: CallerIdentity
    owner: CallerIdentity
    editor: CallerIdentity
    viewer: CallerIdentity
    stranger: CallerIdentity
    photo: PhotoRecord


@pytest.fixture
def events() -> list[str]:
    return []


@pytest.fixture
def object_store_config() -> ObjectStoreConfig:
    return ObjectStoreConfig(
        access_key_id="test-key-id",
        access_key_secret="test-secret",
        bucket="album-bucket",
        region="oss-cn-hangzhou",
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="anon.key.signature",
        supabase_service_role_key="service.key.signature",
        oss_access_key_id="test-key-id",
        oss_access_key_secret="test-secret",
        oss_bucket="album-bucket",
        oss_region="oss-cn-hangzhou",
        allowed_origins="https://album.example.com,http://localhost:5173",
    )


@pytest.fixture
def photo_repository(events: list[str]) -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository(events=events)


@pytest.fixture
def transport(events: list[str]) -> FakeObjectStoreTransport:
    return FakeObjectStoreTransport(events=events)


@pytest.fixture
def scenario(
    photo_repository: InMemoryPhotoRepository, transport: FakeObjectStoreTransport
) -> Scenario:
    album_id = uuid4()
    people = {
        name: CallerIdentity(user_id=uuid4())
        for name in ("uploader", "owner", "editor", "viewer", "stranger")
    }
    photo_repository.roles[(album_id, people["owner"].user_id)] = "owner"
    photo_repository.roles[(album_id, people["editor"].user_id)] = "editor"
    photo_repository.roles[(album_id, people["viewer"].user_id)] = "viewer"
    photo_repository.roles[(album_id, people["uploader"].user_id)] = "editor"
    photo = photo_repository.add_photo(
        "albums/summer/beach.jpg", people["uploader"].user_id, album_id
    )
    transport.objects.add(photo.object_key)
    return Scenario(album_id=album_id, photo=photo, **people)


@pytest.fixture
def identity_provider(scenario: Scenario, events: list[str]) -> FakeIdentityProvider:
    return FakeIdentityProvider(
        callers={
            UPLOADER_TOKEN: scenario.uploader,
            OWNER_TOKEN: scenario.owner,
            EDITOR_TOKEN: scenario.editor,
            VIEWER_TOKEN: scenario.viewer,
            STRANGER_TOKEN: scenario.stranger,
        },
        events=events,
    )


@pytest.fixture
def deletion_service(
    identity_provider: FakeIdentityProvider,
    photo_repository: InMemoryPhotoRepository,
    transport: FakeObjectStoreTransport,
    object_store_config: ObjectStoreConfig,
) -> DeletionService:
    return DeletionService(
        identity_provider=identity_provider,
        authorizer=Authorizer(photo_repository),
        photo_repository=photo_repository,
        transport=transport,
        object_store=object_store_config,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def container(settings: Settings, deletion_service: DeletionService) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        deletion_service=deletion_service,
        close_resources=close_resources,
    )
