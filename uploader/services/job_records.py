"""
Persistence of video publish job records.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from uploader.clients.dynamodb import DynamoDBClient
from uploader.core.errors import RecordNotFound, StoreError
from uploader.models.job import Job, JobKey, JobStatus

STATUS_ATTRIBUTE = "Status"
VIDEO_ID_ATTRIBUTE = "YoutubeVideoId"
PUBLISHED_AT_ATTRIBUTE = "UploadedToYoutubeAt"


class JobRecords:
    """Load jobs and apply targeted status updates."""

    def __init__(self, dynamodb_client: DynamoDBClient) -> None:
        self._ddb = dynamodb_client

    def load(self, key: JobKey) -> Job:
        record = self._ddb.get_item(partition_key=key.partition_key, sort_key=key.sort_key)
        if not record:
            raise RecordNotFound(f"No video record stored for {key}.")
        return _job_from_record(key, record)

    def set_status(self, key: JobKey, status: JobStatus) -> None:
        self._ddb.update_attributes(
            partition_key=key.partition_key,
            sort_key=key.sort_key,
            attributes={STATUS_ATTRIBUTE: JobStatus(status).value},
        )

    def mark_uploaded(self, key: JobKey, *, video_id: str, published_at: int) -> None:
        """Record the platform id alongside the terminal status in one update."""
        self._ddb.update_attributes(
            partition_key=key.partition_key,
            sort_key=key.sort_key,
            attributes={
                STATUS_ATTRIBUTE: JobStatus.UPLOADED.value,
                VIDEO_ID_ATTRIBUTE: video_id,
                PUBLISHED_AT_ATTRIBUTE: published_at,
            },
        )


def _job_from_record(key: JobKey, record: Dict[str, Any]) -> Job:
    raw_status = record.get(STATUS_ATTRIBUTE)
    try:
        status = JobStatus(raw_status)
    except ValueError as exc:
        raise StoreError(f"Video record {key} has unknown status {raw_status!r}.") from exc

    return Job(
        key=key,
        title=record.get("VideoTitle") or "",
        description=record.get("VideoDescription") or "",
        asset_locator=record.get("SK") or key.sort_key,
        owner_id=record.get("UserId"),
        status=status,
        thumbnail_key=record.get("ThumbnailKey") or None,
        created_at=_optional_int(record.get("UploadedToPlatformAt")),
        published_at=_optional_int(record.get(PUBLISHED_AT_ATTRIBUTE)),
        platform_video_id=record.get(VIDEO_ID_ATTRIBUTE),
    )


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


__all__ = ["JobRecords"]
