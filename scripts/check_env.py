"""Report whether a publish worker environment is complete.

Every settings group is validated on its own so one run lists all missing or
invalid variables, named as the worker reads them::

    python -m scripts.check_env --env-file /opt/yt-uploader/.env
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from uploader.core.config import (
    AWSSettings,
    GoogleSettings,
    OAuthSettings,
    PublishJobSettings,
    YouTubeSettings,
    load_settings,
)
from uploader.core.errors import ConfigMissing

SETTINGS_GROUPS = (
    ("job", PublishJobSettings),
    ("google", GoogleSettings),
    ("aws", AWSSettings),
    ("oauth", OAuthSettings),
    ("youtube", YouTubeSettings),
)


def collect_problems() -> list[str]:
    """Validate each group against the current environment."""
    problems: list[str] = []
    for group, settings_cls in SETTINGS_GROUPS:
        try:
            settings_cls()
        except ValidationError as exc:
            for error in exc.errors():
                variable = ".".join(str(part) for part in error["loc"]) or group
                problems.append(f"[{group}] {variable}: {error['msg']}")
    return problems


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check the publish worker's settings.")
    parser.add_argument(
        "--env-file",
        default=".env",
        type=Path,
        help="Environment file read before the process environment (default: .env).",
    )
    args = parser.parse_args(argv)

    try:
        settings = load_settings(str(args.env_file))
    except ValidationError:
        problems = collect_problems()
    else:
        problems = []

    if problems:
        print(f"Publish worker settings are incomplete ({args.env_file}):", file=sys.stderr)
        for line in problems:
            print(f"  {line}", file=sys.stderr)
        return ConfigMissing.exit_code

    print(
        f"Ready to publish {settings.job.video_sk} to channel {settings.job.channel_sk} "
        f"from s3://{settings.aws.bucket_name} (table {settings.aws.table_name}, "
        f"region {settings.aws.region_name})."
    )
    return 0


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
