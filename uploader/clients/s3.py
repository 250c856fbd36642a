"""
Amazon S3 access for approved video assets.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from uploader.core.config import AWSSettings
from uploader.core.errors import AssetNotFound, AssetTransientError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "video/*"
_MISSING_CODES = {"NoSuchKey", "NotFound", "404"}


class AssetStream:
    """Forward-only byte stream over an S3 object body."""

    def __init__(
        self,
        body: Any,
        *,
        key: str,
        content_length: Optional[int],
        content_type: Optional[str],
    ) -> None:
        self._body = body
        self.key = key
        self.content_length = content_length
        self.content_type = content_type if _is_video_type(content_type) else DEFAULT_CONTENT_TYPE
        self.bytes_read = 0
        self._closed = False

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes; an empty result means the object is exhausted."""
        try:
            data = self._body.read(size)
        except (BotoCoreError, OSError) as exc:
            raise AssetTransientError(
                f"Reading s3 object {self.key} failed after {self.bytes_read} bytes: {exc}"
            ) from exc
        self.bytes_read += len(data)
        return data

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._body.close()
        except (BotoCoreError, OSError):  # pragma: no cover - connection already gone
            logger.warning("Failed to close s3 stream", extra={"key": self.key})


class S3AssetStorage:
    """Open approved assets as streams without buffering them locally."""

    def __init__(self, settings: AWSSettings, client: Any | None = None) -> None:
        self._settings = settings
        if client is None:
            client = boto3.client(
                "s3",
                region_name=settings.region_name,
                config=Config(
                    connect_timeout=settings.s3_connect_timeout_seconds,
                    read_timeout=settings.s3_read_timeout_seconds,
                    retries={"total_max_attempts": 1},
                ),
            )
        self._client = client

    def open(self, key: str) -> AssetStream:
        """Start streaming the object stored under ``key``."""
        try:
            response = self._client.get_object(Bucket=self._settings.bucket_name, Key=key)
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _MISSING_CODES:
                raise AssetNotFound(
                    f"s3://{self._settings.bucket_name}/{key} does not exist"
                ) from exc
            raise AssetTransientError(
                f"Failed to open s3://{self._settings.bucket_name}/{key}: {exc}"
            ) from exc
        except BotoCoreError as exc:
            raise AssetTransientError(
                f"Failed to open s3://{self._settings.bucket_name}/{key}: {exc}"
            ) from exc

        content_length = response.get("ContentLength")
        return AssetStream(
            response["Body"],
            key=key,
            content_length=int(content_length) if content_length is not None else None,
            content_type=response.get("ContentType"),
        )


def _is_video_type(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.lower().startswith("video/")


__all__ = ["AssetStream", "S3AssetStorage", "DEFAULT_CONTENT_TYPE"]
