"""Pydantic models for the deletion endpoint payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DeleteObjectRequest(BaseModel):
    """Inbound deletion payload; the key is validated by the service."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    object_name: Any = Field(default=None, alias="objectName")
