from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from uploader.core.config import AppSettings, YouTubeSettings, load_settings


def _clear_env(monkeypatch: pytest.MonkeyPatch, *keys: str) -> None:
    # setenv first so monkeypatch restores the original state afterwards.
    for key in keys:
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)


def test_settings_load_from_environment() -> None:
    settings = AppSettings()

    assert settings.job.channel_sk == "CHANNEL#main"
    assert settings.job.video_sk == "VIDEO#uploads/teaser.mp4"
    assert settings.aws.bucket_name == "yt-uploads"
    assert settings.youtube.visibility == "private"
    assert settings.youtube.upload_chunk_size == 8 * 1024 * 1024
    assert settings.google.token_uri == "https://oauth2.googleapis.com/token"


def test_missing_job_identifier_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch, "VIDEO_SK")

    with pytest.raises(ValidationError):
        AppSettings()


def test_empty_required_value_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TABLE_NAME", "")

    with pytest.raises(ValidationError):
        AppSettings()


def test_public_visibility_is_not_configurable() -> None:
    with pytest.raises(ValidationError):
        YouTubeSettings(YOUTUBE_VISIBILITY="public")

    assert YouTubeSettings(YOUTUBE_VISIBILITY="unlisted").visibility == "unlisted"


@pytest.mark.parametrize("chunk_size", [0, 1000, 256 * 1024 + 1])
def test_chunk_size_must_align_to_resumable_granularity(chunk_size: int) -> None:
    with pytest.raises(ValidationError):
        YouTubeSettings(YOUTUBE_UPLOAD_CHUNK_SIZE=chunk_size)


def test_env_file_fills_gaps_without_overriding(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _clear_env(monkeypatch, "YOUTUBE_CATEGORY_ID")
    monkeypatch.setenv("REGION", "eu-west-1")
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\nYOUTUBE_CATEGORY_ID='22'\nREGION=us-west-2\nnot-a-pair\n",
        encoding="utf-8",
    )

    settings = load_settings(str(env_file))

    assert settings.youtube.category_id == "22"
    assert settings.aws.region_name == "eu-west-1"
