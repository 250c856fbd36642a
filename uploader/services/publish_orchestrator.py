"""
End-to-end lifecycle of a single publish attempt.

The job moves ``awaiting_approval -> uploading_to_yt`` before any external
side effect, then ends in ``uploaded_to_yt`` or ``failed``. The store only ever
sees ``failed`` for a broken run; the precise error kind is returned to the
caller and logged.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from uploader.clients.s3 import S3AssetStorage
from uploader.clients.youtube import YouTubePublisher
from uploader.core.errors import InvalidStatusTransition, JobNotPublishable, PublishError
from uploader.models.job import JobKey, JobStatus, UploadResult, Visibility
from uploader.services.credential_store import CredentialStore
from uploader.services.job_records import JobRecords
from uploader.services.token_lifecycle import TokenLifecycleManager
from uploader.utils.asset_keys import asset_key_for
from uploader.utils.clock import to_epoch_ms, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishOutcome:
    """Result of one invocation, handed back to the entry point."""

    job_key: JobKey
    status: Optional[JobStatus]
    video_id: Optional[str] = None
    error: Optional[PublishError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.error is None else self.error.exit_code


class StatusTracker:
    """Writes status changes for one job, refusing edges outside the state machine."""

    def __init__(self, records: JobRecords, key: JobKey, current: JobStatus) -> None:
        self._records = records
        self._key = key
        self._current = current

    @property
    def current(self) -> JobStatus:
        return self._current

    def advance(self, target: JobStatus) -> None:
        self._check(target)
        self._records.set_status(self._key, target)
        self._commit(target)

    def complete(self, result: UploadResult, published_at: int) -> None:
        self._check(JobStatus.UPLOADED)
        self._records.mark_uploaded(self._key, video_id=result.video_id, published_at=published_at)
        self._commit(JobStatus.UPLOADED)

    def _check(self, target: JobStatus) -> None:
        if not self._current.can_transition_to(target):
            raise InvalidStatusTransition(
                f"Job {self._key} cannot move from {self._current.value} to {target.value}"
            )

    def _commit(self, target: JobStatus) -> None:
        logger.info(
            "Job status %s -> %s",
            self._current.value,
            target.value,
            extra={"job_key": str(self._key)},
        )
        self._current = target


class PublishOrchestrator:
    """Compose credentials, storage and transport into one publish run."""

    def __init__(
        self,
        *,
        job_records: JobRecords,
        credential_store: CredentialStore,
        token_manager: TokenLifecycleManager,
        asset_storage: S3AssetStorage,
        publisher: YouTubePublisher,
        visibility: Visibility = Visibility.PRIVATE,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._jobs = job_records
        self._credentials = credential_store
        self._tokens = token_manager
        self._storage = asset_storage
        self._publisher = publisher
        self._visibility = Visibility(visibility)
        self._clock = clock

    async def run(self, *, job_key: JobKey, channel_id: str) -> PublishOutcome:
        logger.info("Starting publish job", extra={"job_key": str(job_key), "channel_id": channel_id})
        try:
            job = self._jobs.load(job_key)
            if job.status is not JobStatus.AWAITING_APPROVAL:
                raise JobNotPublishable(
                    f"Job {job_key} is {job.status.value}; only awaiting_approval jobs are published."
                )
            tracker = StatusTracker(self._jobs, job_key, job.status)
            tracker.advance(JobStatus.UPLOADING)
        except PublishError as exc:
            return self._report(job_key, None, exc)

        try:
            result = await self._publish(job_key, channel_id)
        except PublishError as exc:
            self._mark_failed(tracker, exc)
            return self._report(job_key, tracker.current, exc)
        except Exception as exc:
            logger.exception("Unexpected failure while publishing", extra={"job_key": str(job_key)})
            self._mark_failed(tracker, exc)
            raise

        logger.info("Video uploaded with id %s", result.video_id, extra={"job_key": str(job_key)})
        try:
            tracker.complete(result, to_epoch_ms(self._clock()))
        except PublishError as exc:
            # The upload went through; leave the job visibly in progress for an operator.
            logger.error(
                "Uploaded video %s but could not record it",
                result.video_id,
                extra={"job_key": str(job_key)},
            )
            return self._report(job_key, tracker.current, exc, video_id=result.video_id)

        return PublishOutcome(job_key=job_key, status=tracker.current, video_id=result.video_id)

    async def _publish(self, job_key: JobKey, channel_id: str) -> UploadResult:
        credential = self._credentials.load(org_id=job_key.org_id, channel_id=channel_id)
        credential = await self._tokens.ensure_valid(credential)

        job = self._jobs.load(job_key)
        if job.status is not JobStatus.UPLOADING:
            logger.warning(
                "Job status changed to %s while publishing",
                job.status.value,
                extra={"job_key": str(job_key)},
            )

        asset_key = asset_key_for(job.asset_locator)
        stream = await asyncio.to_thread(self._storage.open, asset_key)
        logger.info(
            "Opened asset %s (%s bytes, %s)",
            asset_key,
            stream.content_length,
            stream.content_type,
            extra={"job_key": str(job_key)},
        )
        try:
            return await asyncio.to_thread(
                self._publisher.upload,
                access_token=credential.access_token,
                title=job.title,
                description=job.description,
                stream=stream,
                visibility=self._visibility,
            )
        finally:
            stream.close()

    def _mark_failed(self, tracker: StatusTracker, cause: BaseException) -> None:
        try:
            tracker.advance(JobStatus.FAILED)
        except (PublishError, InvalidStatusTransition) as exc:
            logger.error(
                "Could not mark job failed after %s: %s",
                type(cause).__name__,
                exc,
            )

    def _report(
        self,
        job_key: JobKey,
        status: Optional[JobStatus],
        error: PublishError,
        video_id: Optional[str] = None,
    ) -> PublishOutcome:
        logger.error(
            "Publish job failed [%s]: %s",
            error.kind,
            error,
            extra={"job_key": str(job_key)},
        )
        return PublishOutcome(job_key=job_key, status=status, video_id=video_id, error=error)


__all__ = ["PublishOrchestrator", "PublishOutcome", "StatusTracker"]
