"""Deletion outcome models."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class DeletionStatus(Enum):
    """Terminal states that produce a 200 response."""

    SUCCEEDED = "succeeded"
    DEGRADED = "degraded"


@dataclass(frozen=True)
class DeletionOutcome:
    """Result of a completed remote deletion."""

    status: DeletionStatus
    object_key: str
    record_id: UUID
    warning: str | None = None

    def to_body(self) -> dict[str, object]:
        """Return the JSON response body."""
        if self.status is DeletionStatus.DEGRADED:
            return {"ok": True, "objectKey": self.object_key, "warning": self.warning}
        return {
            "ok": True,
            "objectKey": self.object_key,
            "recordId": str(self.record_id),
        }
