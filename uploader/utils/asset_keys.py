"""Mapping between a job's stored asset reference and its S3 object key."""

from __future__ import annotations

from uploader.core.errors import AssetNotFound

VIDEO_KEY_PREFIX = "VIDEO#"


def asset_key_for(asset_locator: str) -> str:
    """Return the bucket key for a video record's sort key.

    Records are keyed ``VIDEO#<object key>``; a locator without the prefix is
    already a bare object key.
    """
    key = asset_locator[len(VIDEO_KEY_PREFIX) :] if asset_locator.startswith(VIDEO_KEY_PREFIX) else asset_locator
    if not key:
        raise AssetNotFound(f"Asset locator {asset_locator!r} does not name an object.")
    return key


__all__ = ["VIDEO_KEY_PREFIX", "asset_key_for"]
