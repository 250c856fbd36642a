"""
Persistence of channel OAuth credentials.
"""

from __future__ import annotations

from typing import Any

from uploader.clients.dynamodb import DynamoDBClient
from uploader.core.errors import RecordNotFound
from uploader.models.credential import Credential


class CredentialStore:
    """Read and write the token fields of a channel record."""

    def __init__(self, dynamodb_client: DynamoDBClient) -> None:
        self._ddb = dynamodb_client

    def load(self, *, org_id: str, channel_id: str) -> Credential:
        record = self._ddb.get_item(partition_key=org_id, sort_key=channel_id)
        if not record:
            raise RecordNotFound(f"No channel record stored for {org_id}/{channel_id}.")

        access_token = record.get("accessToken")
        refresh_token = record.get("refreshToken")
        expires_at = record.get("tokenExpiryDate")
        if not refresh_token or expires_at is None:
            raise RecordNotFound(
                f"Channel record {org_id}/{channel_id} is missing OAuth token fields."
            )

        return Credential(
            org_id=org_id,
            channel_id=channel_id,
            access_token=access_token or "",
            refresh_token=refresh_token,
            token_type=record.get("tokenType") or "Bearer",
            scope=record.get("scope") or "",
            issued_at=_as_int(record.get("tokenIssuedAt")),
            expires_at=_as_int(expires_at),
            user_id=record.get("userId"),
        )

    def save(self, credential: Credential) -> None:
        """Persist a refreshed access token. The refresh token is never written."""
        self._ddb.update_attributes(
            partition_key=credential.org_id,
            sort_key=credential.channel_id,
            attributes={
                "accessToken": credential.access_token,
                "tokenExpiryDate": credential.expires_at,
                "tokenIssuedAt": credential.issued_at,
            },
        )


def _as_int(value: Any) -> int:
    # DynamoDB numbers come back as Decimal.
    if value is None:
        return 0
    return int(value)


__all__ = ["CredentialStore"]
