"""
Keeps a channel's delegated access token usable for the duration of a run.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

import httpx

from uploader.clients.google_auth import GoogleOAuthClient, OAuthTokenExchangeError
from uploader.core.errors import TokenRefreshFailed
from uploader.models.credential import Credential
from uploader.services.credential_store import CredentialStore
from uploader.utils.clock import to_epoch_ms, utc_now

logger = logging.getLogger(__name__)


class TokenLifecycleManager:
    """Validate a credential and refresh it through the OAuth provider when expired."""

    def __init__(
        self,
        credential_store: CredentialStore,
        oauth_client: GoogleOAuthClient,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = credential_store
        self._oauth = oauth_client
        self._clock = clock

    async def ensure_valid(self, credential: Credential) -> Credential:
        """Return a credential whose access token is valid right now.

        "Now" is sampled once; the expiry check and the new expiry are both
        computed from that instant. There is no retry on refresh failure.
        """
        now_ms = to_epoch_ms(self._clock())
        if not credential.is_expired(now_ms):
            logger.info(
                "Reusing access token",
                extra={"channel_id": credential.channel_id, "expires_at": credential.expires_at},
            )
            return credential

        logger.info("Access token expired; refreshing", extra={"channel_id": credential.channel_id})
        try:
            access_token, expires_in = await self._oauth.refresh_token(credential.refresh_token)
        except (OAuthTokenExchangeError, httpx.HTTPError) as exc:
            raise TokenRefreshFailed(
                f"Refreshing the access token for channel {credential.channel_id} failed: {exc}"
            ) from exc

        refreshed = credential.with_refreshed_token(
            access_token=access_token,
            issued_at=now_ms,
            expires_at=now_ms + expires_in * 1000,
        )
        self._store.save(refreshed)
        logger.info(
            "Persisted refreshed access token",
            extra={"channel_id": refreshed.channel_id, "expires_at": refreshed.expires_at},
        )
        return refreshed


__all__ = ["TokenLifecycleManager"]
