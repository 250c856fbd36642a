"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for rootdir-less collection
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from uploader.core.config import AWSSettings, GoogleSettings, OAuthSettings, YouTubeSettings


@pytest.fixture
def aws_settings() -> AWSSettings:
    return AWSSettings(
        REGION="us-east-1",
        TABLE_NAME="publisher-table",
        YT_UPLOADS_S3_BUCKET_NAME="yt-uploads",
    )


@pytest.fixture
def google_settings() -> GoogleSettings:
    return GoogleSettings(
        GOOGLE_CLIENT_ID="client",
        GOOGLE_CLIENT_SECRET="secret",
        GOOGLE_TOKEN_URI="https://oauth.example/token",
    )


@pytest.fixture
def oauth_settings() -> OAuthSettings:
    return OAuthSettings()


@pytest.fixture
def youtube_settings() -> YouTubeSettings:
    return YouTubeSettings(YOUTUBE_UPLOAD_CHUNK_SIZE=256 * 1024)
