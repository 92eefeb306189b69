"""Application configuration."""

import os
from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


@dataclass(frozen=True)
class ObjectStoreConfig:
    """Immutable object store credentials and addressing."""

    access_key_id: str
    access_key_secret: str
    bucket: str
    region: str
    timeout_seconds: float = 10.0

    @property
    def host(self) -> str:
        """Return the virtual-hosted bucket endpoint."""
        return f"{self.bucket}.{self.region}.aliyuncs.com"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_anon_key: str
    supabase_service_role_key: str | None = None
    oss_access_key_id: str | None = None
    oss_access_key_secret: str | None = None
    oss_bucket: str | None = None
    oss_region: str | None = None
    oss_timeout_seconds: float = 10.0
    allowed_origins: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def object_store(self) -> ObjectStoreConfig | None:
        """Return the object store config, or None when any field is missing."""
        if not (
            self.oss_access_key_id
            and self.oss_access_key_secret
            and self.oss_bucket
            and self.oss_region
        ):
            return None
        return ObjectStoreConfig(
            access_key_id=self.oss_access_key_id,
            access_key_secret=self.oss_access_key_secret,
            bucket=self.oss_bucket,
            region=self.oss_region,
            timeout_seconds=self.oss_timeout_seconds,
        )


def parse_allowed_origins(raw: str | None) -> tuple[str, ...]:
    """Parse the comma-separated CORS allow-list; empty means allow all."""
    if raw is None:
        return ()
    return tuple(chunk.strip() for chunk in raw.split(",") if chunk.strip())
