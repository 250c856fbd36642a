"""Tests for the worker settings check script."""

from __future__ import annotations

from pathlib import Path

import pytest

from scripts import check_env

REQUIRED_ENV_KEYS = [
    "CHANNEL_SK",
    "ORG_SK",
    "PROJECT_SK",
    "VIDEO_SK",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "REGION",
    "TABLE_NAME",
    "YT_UPLOADS_S3_BUCKET_NAME",
]

VALID_ENV = {
    "CHANNEL_SK": "CHANNEL#main",
    "ORG_SK": "ORG#acme",
    "PROJECT_SK": "PROJECT#launch",
    "VIDEO_SK": "VIDEO#teaser.mp4",
    "GOOGLE_CLIENT_ID": "abc",
    "GOOGLE_CLIENT_SECRET": "secret",
    "REGION": "us-east-1",
    "TABLE_NAME": "table-name",
    "YT_UPLOADS_S3_BUCKET_NAME": "bucket-name",
}


def _write_env(env_path: Path, **values: str) -> None:
    contents = "\n".join(f"{key}={value}" for key, value in values.items())
    env_path.write_text(contents + "\n", encoding="utf-8")


def _clear_required_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # setenv first so values loaded from env files are removed on teardown.
    for key in REQUIRED_ENV_KEYS:
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)


def test_complete_env_file_passes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    env_file = tmp_path / ".env"
    _clear_required_env(monkeypatch)
    _write_env(env_file, **VALID_ENV)

    exit_code = check_env.main(["--env-file", str(env_file)])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "VIDEO#teaser.mp4" in out
    assert "s3://bucket-name" in out


def test_every_missing_variable_is_listed(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys
) -> None:
    env_file = tmp_path / ".env"
    _clear_required_env(monkeypatch)
    dropped = {"VIDEO_SK", "GOOGLE_CLIENT_SECRET", "YT_UPLOADS_S3_BUCKET_NAME"}
    _write_env(env_file, **{key: value for key, value in VALID_ENV.items() if key not in dropped})

    exit_code = check_env.main(["--env-file", str(env_file)])

    assert exit_code == 2
    err = capsys.readouterr().err
    assert "[job] VIDEO_SK" in err
    assert "[google] GOOGLE_CLIENT_SECRET" in err
    assert "[aws] YT_UPLOADS_S3_BUCKET_NAME" in err
    assert "TABLE_NAME" not in err


def test_invalid_tuning_value_is_reported(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys
) -> None:
    env_file = tmp_path / ".env"
    _clear_required_env(monkeypatch)
    monkeypatch.setenv("YOUTUBE_UPLOAD_CHUNK_SIZE", "1000")
    _write_env(env_file, **VALID_ENV)

    exit_code = check_env.main(["--env-file", str(env_file)])

    assert exit_code == 2
    assert "[youtube] YOUTUBE_UPLOAD_CHUNK_SIZE" in capsys.readouterr().err


def test_missing_env_file_falls_back_to_process_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    for key, value in VALID_ENV.items():
        monkeypatch.setenv(key, value)

    assert check_env.main(["--env-file", str(tmp_path / "absent.env")]) == 0
