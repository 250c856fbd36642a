"""
Google OAuth token endpoint client.

Only the refresh-token grant is used here; the initial consent flow that
creates channel credentials happens elsewhere.
"""

from __future__ import annotations

from typing import Tuple

import httpx

from uploader.core.config import GoogleSettings, OAuthSettings


class OAuthTokenExchangeError(Exception):
    """Raised when the token endpoint returns an error."""


class GoogleOAuthClient:
    """Exchange refresh tokens for short-lived access tokens."""

    def __init__(
        self,
        google_settings: GoogleSettings,
        oauth_settings: OAuthSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._google = google_settings
        self._oauth = oauth_settings
        self._transport = transport

    @property
    def token_url(self) -> str:
        return self._google.token_uri

    async def refresh_token(self, refresh_token: str) -> Tuple[str, int]:
        """
        Refresh the access token using a stored refresh token.

        Returns a tuple of (access_token, expires_in_seconds).
        """
        payload = {
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }

        async with httpx.AsyncClient(
            timeout=self._oauth.refresh_timeout_seconds, transport=self._transport
        ) as client:
            response = await client.post(self.token_url, data=payload)

        if response.status_code != httpx.codes.OK:
            raise OAuthTokenExchangeError(_describe_error(response))

        try:
            token_payload = response.json()
        except ValueError as exc:
            raise OAuthTokenExchangeError("Google returned a non-JSON refresh payload.") from exc
        if not isinstance(token_payload, dict):
            raise OAuthTokenExchangeError("Google returned a refresh payload that is not an object.")

        access_token = token_payload.get("access_token")
        expires_in = token_payload.get("expires_in")

        if not access_token or not expires_in:
            raise OAuthTokenExchangeError("Incomplete refresh payload returned from Google.")
        try:
            lifetime = int(expires_in)
        except (TypeError, ValueError) as exc:
            raise OAuthTokenExchangeError(f"Google returned an unreadable token lifetime: {expires_in!r}") from exc
        if lifetime <= 0:
            raise OAuthTokenExchangeError("Google returned a non-positive token lifetime.")

        return access_token, lifetime


def _describe_error(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}: {response.text}"
    if not isinstance(body, dict):
        return f"HTTP {response.status_code}: {response.text}"
    error = body.get("error", "unknown_error")
    description = body.get("error_description")
    if description:
        return f"HTTP {response.status_code}: {error} ({description})"
    return f"HTTP {response.status_code}: {error}"


__all__ = ["GoogleOAuthClient", "OAuthTokenExchangeError"]
