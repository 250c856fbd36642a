"""
Domain models for a video publish job and its lifecycle status.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class JobStatus(str, Enum):
    """Status values as stored on the video record."""

    AWAITING_APPROVAL = "awaiting_approval"
    UPLOADING = "uploading_to_yt"
    UPLOADED = "uploaded_to_yt"
    REJECTED = "rejected_by_creator"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL

    def can_transition_to(self, target: "JobStatus") -> bool:
        return target in _TRANSITIONS.get(self, frozenset())


_TERMINAL = frozenset({JobStatus.UPLOADED, JobStatus.FAILED, JobStatus.REJECTED})

# Only the edges this worker may write. Rejection is set by the approval flow.
_TRANSITIONS: dict[JobStatus, frozenset[JobStatus]] = {
    JobStatus.AWAITING_APPROVAL: frozenset({JobStatus.UPLOADING}),
    JobStatus.UPLOADING: frozenset({JobStatus.UPLOADED, JobStatus.FAILED}),
}


class Visibility(str, Enum):
    """Privacy states an upload may be created with."""

    PRIVATE = "private"
    UNLISTED = "unlisted"


@dataclass(frozen=True)
class JobKey:
    """Composite identity of a job record."""

    org_id: str
    project_id: str
    video_id: str

    @property
    def partition_key(self) -> str:
        return f"{self.org_id}#{self.project_id}"

    @property
    def sort_key(self) -> str:
        return self.video_id

    def __str__(self) -> str:
        return f"{self.partition_key}/{self.sort_key}"


class Job(BaseModel):
    """A single video's publish record."""

    model_config = ConfigDict(frozen=True)

    key: JobKey
    title: str = ""
    description: str = ""
    asset_locator: str = Field(..., description="Reference to the approved asset in blob storage.")
    owner_id: Optional[str] = None
    status: JobStatus
    thumbnail_key: Optional[str] = None
    created_at: Optional[int] = Field(None, description="Millisecond epoch the asset landed in storage.")
    published_at: Optional[int] = None
    platform_video_id: Optional[str] = None


@dataclass(frozen=True)
class UploadResult:
    """Identifier assigned by the platform to an accepted upload."""

    video_id: str
    upload_status: Optional[str] = None


__all__ = ["Job", "JobKey", "JobStatus", "UploadResult", "Visibility"]
