"""Service layer exports."""

from .credential_store import CredentialStore
from .job_records import JobRecords
from .publish_orchestrator import PublishOrchestrator, PublishOutcome, StatusTracker
from .token_lifecycle import TokenLifecycleManager

__all__ = [
    "CredentialStore",
    "JobRecords",
    "PublishOrchestrator",
    "PublishOutcome",
    "StatusTracker",
    "TokenLifecycleManager",
]
