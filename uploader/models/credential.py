"""
Domain model for a channel's delegated OAuth credential.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Credential(BaseModel):
    """Represents a channel credential record stored in DynamoDB."""

    model_config = ConfigDict(frozen=True)

    org_id: str = Field(..., description="Partition key of the owning organization.")
    channel_id: str = Field(..., description="Sort key identifying the channel.")
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    scope: str = ""
    issued_at: int = Field(0, description="Millisecond epoch the access token was issued.")
    expires_at: int = Field(..., description="Millisecond epoch the access token stops working.")
    user_id: Optional[str] = None

    def is_expired(self, now_ms: int) -> bool:
        """Tokens expiring exactly at ``now_ms`` count as expired."""
        return self.expires_at <= now_ms

    def with_refreshed_token(self, *, access_token: str, issued_at: int, expires_at: int) -> "Credential":
        return self.model_copy(
            update={
                "access_token": access_token,
                "issued_at": issued_at,
                "expires_at": expires_at,
            }
        )


__all__ = ["Credential"]
