"""
Error kinds surfaced by a publish run.

Every kind is fatal to the invocation. Each carries a stable ``kind`` label for
logs and an ``exit_code`` the entry point hands back to the process.
"""

from __future__ import annotations


class PublishError(Exception):
    """Base class for failures that end a publish run."""

    kind = "PublishError"
    exit_code = 1


class ConfigMissing(PublishError):
    """Required configuration is absent or malformed."""

    kind = "ConfigMissing"
    exit_code = 2


class RecordNotFound(PublishError):
    """The credential or job record does not exist in the store."""

    kind = "RecordNotFound"
    exit_code = 3


class StoreError(PublishError):
    """A read or write against the durable store failed."""

    kind = "StoreError"
    exit_code = 4


class TokenRefreshFailed(PublishError):
    """The OAuth provider did not grant a fresh access token."""

    kind = "TokenRefreshFailed"
    exit_code = 5


class AssetNotFound(PublishError):
    """The approved asset is missing from blob storage."""

    kind = "AssetNotFound"
    exit_code = 6


class AssetTransientError(PublishError):
    """Blob storage could not be reached or the read was interrupted."""

    kind = "AssetTransientError"
    exit_code = 7


class TransportError(PublishError):
    """Delivery to the video platform failed or its outcome is unknown."""

    kind = "TransportError"
    exit_code = 8


class RejectedByPlatform(PublishError):
    """The video platform explicitly refused the upload."""

    kind = "RejectedByPlatform"
    exit_code = 9

    def __init__(self, message: str, *, reason: str | None = None) -> None:
        super().__init__(message)
        self.reason = reason


class JobNotPublishable(PublishError):
    """The job is not awaiting approval, so this run must not touch it."""

    kind = "JobNotPublishable"
    exit_code = 10


class InvalidStatusTransition(RuntimeError):
    """A status change outside the publish state machine was requested."""


__all__ = [
    "AssetNotFound",
    "AssetTransientError",
    "ConfigMissing",
    "InvalidStatusTransition",
    "JobNotPublishable",
    "PublishError",
    "RecordNotFound",
    "RejectedByPlatform",
    "StoreError",
    "TokenRefreshFailed",
    "TransportError",
]
