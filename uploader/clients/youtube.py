"""
YouTube Data API v3 upload client.

The asset is streamed into a resumable upload chunk by chunk, so memory use is
bounded by the chunk size no matter how long the video is.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

import google_auth_httplib2
import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaUpload

from uploader.clients.s3 import AssetStream
from uploader.core.config import YouTubeSettings
from uploader.core.errors import RejectedByPlatform, TransportError
from uploader.models.job import UploadResult, Visibility

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 5000

_REJECTION_STATUSES = {400, 403, 409, 413}
_REJECTED_UPLOAD_STATES = {"rejected", "failed"}
# 403s carrying these reasons are credential or scope problems, not content refusals.
_PERMISSION_REASONS = {"forbidden", "insufficientPermissions", "authError", "unauthorized"}


class StreamingMediaUpload(MediaUpload):
    """Resumable media source reading from a forward-only stream.

    Only the most recent chunk is retained, which is enough to resend the part
    of a chunk the server did not acknowledge.
    """

    def __init__(self, stream: AssetStream, *, chunksize: int) -> None:
        super().__init__()
        self._stream = stream
        self._chunksize = chunksize
        self._buffer = b""
        self._buffer_start = 0

    def chunksize(self) -> int:
        return self._chunksize

    def mimetype(self) -> str:
        return self._stream.content_type

    def size(self) -> Optional[int]:
        return self._stream.content_length

    def resumable(self) -> bool:
        return True

    def has_stream(self) -> bool:
        return False

    def getbytes(self, begin: int, length: int) -> bytes:
        buffer_end = self._buffer_start + len(self._buffer)
        if begin < self._buffer_start or begin > buffer_end:
            raise TransportError(
                f"Upload requested offset {begin} outside the retained window "
                f"[{self._buffer_start}, {buffer_end}]"
            )

        retained = self._buffer[begin - self._buffer_start :]
        parts = [retained]
        missing = length - len(retained)
        while missing > 0:
            data = self._stream.read(missing)
            if not data:
                break
            parts.append(data)
            missing -= len(data)

        self._buffer = b"".join(parts)
        self._buffer_start = begin
        return self._buffer[:length]


def _build_service(access_token: str, socket_timeout: float) -> Any:
    # No refresh material: an expired token mid-upload must fail, not refresh silently.
    credentials = Credentials(token=access_token)
    http = google_auth_httplib2.AuthorizedHttp(
        credentials, http=httplib2.Http(timeout=socket_timeout)
    )
    return build("youtube", "v3", http=http, cache_discovery=False)


class YouTubePublisher:
    """Upload a single video with the channel's access token."""

    def __init__(
        self,
        settings: YouTubeSettings,
        service_factory: Callable[[str, float], Any] = _build_service,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._settings = settings
        self._service_factory = service_factory
        self._clock = clock

    def build_metadata(self, *, title: str, description: str, visibility: Visibility) -> dict:
        snippet: dict[str, Any] = {
            "title": title[:MAX_TITLE_LENGTH],
            "description": description[:MAX_DESCRIPTION_LENGTH],
        }
        if self._settings.category_id:
            snippet["categoryId"] = self._settings.category_id
        return {
            "snippet": snippet,
            "status": {"privacyStatus": Visibility(visibility).value},
        }

    def upload(
        self,
        *,
        access_token: str,
        title: str,
        description: str,
        stream: AssetStream,
        visibility: Visibility = Visibility.PRIVATE,
    ) -> UploadResult:
        """Stream ``stream`` to YouTube and return the assigned video id."""
        if stream.content_length is None:
            raise TransportError(f"Asset {stream.key} has no declared content length.")

        body = self.build_metadata(title=title, description=description, visibility=visibility)
        media = StreamingMediaUpload(stream, chunksize=self._settings.upload_chunk_size)
        deadline = self._clock() + self._settings.upload_timeout_seconds

        try:
            service = self._service_factory(access_token, self._settings.socket_timeout_seconds)
            request = service.videos().insert(part="snippet,status", body=body, media_body=media)
            response = None
            while response is None:
                if self._clock() > deadline:
                    raise TransportError(
                        f"Upload exceeded {self._settings.upload_timeout_seconds:.0f}s deadline "
                        f"after {stream.bytes_read} bytes"
                    )
                progress, response = request.next_chunk()
                if progress is not None:
                    logger.info(
                        "Upload progress %.1f%%",
                        progress.progress() * 100,
                        extra={"key": stream.key},
                    )
        except HttpError as exc:
            raise _classify_http_error(exc) from exc
        except (httplib2.HttpLib2Error, GoogleAuthError, OSError) as exc:
            raise TransportError(f"Upload to YouTube interrupted: {exc}") from exc

        return _parse_response(response)


def _error_reasons(exc: HttpError) -> set[str]:
    details = getattr(exc, "error_details", None)
    if not isinstance(details, list):
        return set()
    return {
        str(detail["reason"])
        for detail in details
        if isinstance(detail, dict) and detail.get("reason")
    }


def _classify_http_error(exc: HttpError) -> Exception:
    status = exc.resp.status
    reason = exc.reason if isinstance(exc.reason, str) else None
    reasons = _error_reasons(exc)
    if status == 403 and reasons & _PERMISSION_REASONS:
        return TransportError(
            f"YouTube refused the channel's authorization (HTTP 403): {', '.join(sorted(reasons))}"
        )
    if status in _REJECTION_STATUSES:
        code = min(reasons) if reasons else reason
        return RejectedByPlatform(
            f"YouTube rejected the upload (HTTP {status}): {reason or 'no reason given'}",
            reason=code,
        )
    return TransportError(f"YouTube upload failed (HTTP {status}): {reason or 'no reason given'}")


def _parse_response(response: Any) -> UploadResult:
    if not isinstance(response, dict) or not response.get("id"):
        raise TransportError("YouTube accepted the upload without returning a video id.")

    status = response.get("status") or {}
    upload_status = status.get("uploadStatus")
    if upload_status in _REJECTED_UPLOAD_STATES:
        reason = status.get("rejectionReason") or status.get("failureReason")
        raise RejectedByPlatform(
            f"YouTube marked video {response['id']} as {upload_status}: {reason or 'no reason given'}",
            reason=reason,
        )
    return UploadResult(video_id=response["id"], upload_status=upload_status)


__all__ = [
    "MAX_DESCRIPTION_LENGTH",
    "MAX_TITLE_LENGTH",
    "StreamingMediaUpload",
    "YouTubePublisher",
]
