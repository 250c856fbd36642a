"""
Publisher configuration models and helpers.

Settings are resolved once at process start and passed explicitly to every
component, so nothing below the entry point reads the environment directly.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_UPLOAD_CHUNK_GRANULARITY = 256 * 1024


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


class _EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")


class PublishJobSettings(_EnvSettings):
    """Identifiers of the single job processed by this invocation."""

    channel_sk: str = Field(..., alias="CHANNEL_SK", min_length=1)
    org_sk: str = Field(..., alias="ORG_SK", min_length=1)
    project_sk: str = Field(..., alias="PROJECT_SK", min_length=1)
    video_sk: str = Field(..., alias="VIDEO_SK", min_length=1)


class GoogleSettings(_EnvSettings):
    """OAuth client identity used for the refresh-token grant."""

    client_id: str = Field(..., alias="GOOGLE_CLIENT_ID", min_length=1)
    client_secret: str = Field(..., alias="GOOGLE_CLIENT_SECRET", min_length=1)
    token_uri: str = Field("https://oauth2.googleapis.com/token", alias="GOOGLE_TOKEN_URI")


class AWSSettings(_EnvSettings):
    """Locations of the durable record store and the asset bucket."""

    region_name: str = Field(..., alias="REGION", min_length=1)
    table_name: str = Field(..., alias="TABLE_NAME", min_length=1)
    bucket_name: str = Field(..., alias="YT_UPLOADS_S3_BUCKET_NAME", min_length=1)
    s3_connect_timeout_seconds: float = Field(10.0, alias="S3_CONNECT_TIMEOUT", gt=0)
    s3_read_timeout_seconds: float = Field(60.0, alias="S3_READ_TIMEOUT", gt=0)


class OAuthSettings(_EnvSettings):
    """Refresh grant behaviour."""

    refresh_timeout_seconds: float = Field(10.0, alias="OAUTH_REFRESH_TIMEOUT", gt=0)


class YouTubeSettings(_EnvSettings):
    """Upload parameters for the YouTube Data API."""

    visibility: Literal["private", "unlisted"] = Field("private", alias="YOUTUBE_VISIBILITY")
    category_id: Optional[str] = Field(
        None,
        alias="YOUTUBE_CATEGORY_ID",
        description="Optional video category; the platform default applies when omitted.",
    )
    upload_chunk_size: int = Field(8 * 1024 * 1024, alias="YOUTUBE_UPLOAD_CHUNK_SIZE")
    upload_timeout_seconds: float = Field(3600.0, alias="YOUTUBE_UPLOAD_TIMEOUT", gt=0)
    socket_timeout_seconds: float = Field(120.0, alias="YOUTUBE_SOCKET_TIMEOUT", gt=0)

    @field_validator("upload_chunk_size")
    @classmethod
    def _check_chunk_size(cls, value: int) -> int:
        """Resumable uploads only accept chunks in 256 KiB multiples."""
        if value <= 0 or value % _UPLOAD_CHUNK_GRANULARITY:
            raise ValueError("upload chunk size must be a positive multiple of 262144 bytes")
        return value


class AppSettings(_EnvSettings):
    """Root settings object for a publish invocation."""

    environment: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="APP_LOG_LEVEL")
    job: PublishJobSettings = Field(default_factory=PublishJobSettings)
    google: GoogleSettings = Field(default_factory=GoogleSettings)
    aws: AWSSettings = Field(default_factory=AWSSettings)
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)
    youtube: YouTubeSettings = Field(default_factory=YouTubeSettings)


def load_settings(env_file: str | None = ".env") -> AppSettings:
    """Build the settings for this process, reading ``env_file`` first if present."""
    if env_file:
        _load_env_file(env_file)
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "AWSSettings",
    "GoogleSettings",
    "OAuthSettings",
    "PublishJobSettings",
    "YouTubeSettings",
    "load_settings",
]
