"""
Process entrypoint for publishing one approved video.

The job to publish is identified entirely by configuration; the process exit
code reflects the outcome (0 on success, the error kind's code otherwise).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from uploader.clients import DynamoDBClient, GoogleOAuthClient, S3AssetStorage, YouTubePublisher
from uploader.core.config import AppSettings, load_settings
from uploader.core.errors import ConfigMissing
from uploader.core.logging import configure_logging
from uploader.models.job import JobKey, Visibility
from uploader.services import (
    CredentialStore,
    JobRecords,
    PublishOrchestrator,
    PublishOutcome,
    TokenLifecycleManager,
)

logger = logging.getLogger(__name__)


def _bootstrap(settings: AppSettings) -> PublishOrchestrator:
    """Wire AWS and Google clients for a single run."""
    dynamodb = DynamoDBClient(settings.aws)
    credential_store = CredentialStore(dynamodb)
    oauth_client = GoogleOAuthClient(settings.google, settings.oauth)
    return PublishOrchestrator(
        job_records=JobRecords(dynamodb),
        credential_store=credential_store,
        token_manager=TokenLifecycleManager(credential_store, oauth_client),
        asset_storage=S3AssetStorage(settings.aws),
        publisher=YouTubePublisher(settings.youtube),
        visibility=Visibility(settings.youtube.visibility),
    )


def run(settings: AppSettings, orchestrator: Optional[PublishOrchestrator] = None) -> PublishOutcome:
    """Publish the job named by ``settings`` and return the outcome."""
    orchestrator = orchestrator or _bootstrap(settings)
    job_key = JobKey(
        org_id=settings.job.org_sk,
        project_id=settings.job.project_sk,
        video_id=settings.job.video_sk,
    )
    return asyncio.run(orchestrator.run(job_key=job_key, channel_id=settings.job.channel_sk))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Publish one approved video to YouTube.")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Optional environment file read before settings are loaded (default: .env).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        settings = load_settings(args.env_file)
    except ValidationError as exc:
        configure_logging()
        error = ConfigMissing(f"Missing or invalid configuration: {exc}")
        logger.error("Publish job failed [%s]: %s", error.kind, error)
        return error.exit_code

    configure_logging(settings.log_level)
    outcome = run(settings)
    if outcome.succeeded:
        logger.info("Publish job finished", extra={"video_id": outcome.video_id})
    return outcome.exit_code


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
