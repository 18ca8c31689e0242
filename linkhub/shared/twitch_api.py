"""Twitch API client.

Only public Helix endpoints are used, so every call is made with an App
Access Token obtained through the client-credentials grant. The client does
not cache tokens itself: the web server wraps ``request_app_token`` in a
``TokenCache``, the refresh job requests one token per run.
"""

import logging
from typing import Any, cast

import httpx

from .errors import AuthError, ConfigMissing, UpstreamError, UpstreamTimeout

logger = logging.getLogger(__name__)

HELIX_BASE = "https://api.twitch.tv/helix"
OAUTH_BASE = "https://id.twitch.tv/oauth2"


class TwitchAPIClient:
    """Client for the Twitch OAuth and Helix APIs.

    Manages a shared httpx client for connection reuse. Pass *http* to
    supply a preconfigured client (tests use a mock transport).
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        timeout: float = 10.0,
        http: httpx.AsyncClient | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret

        # Shared HTTP client, reuses TCP connections across requests
        self._http = http or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close the shared HTTP client. Call on app shutdown."""
        await self._http.aclose()

    @property
    def is_configured(self) -> bool:
        """Check if Twitch app credentials are configured"""
        return bool(self.client_id and self.client_secret)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _app_headers(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}", "Client-Id": self.client_id}

    async def _helix_get(self, path: str, params: dict, *, token: str) -> dict[str, Any]:
        """GET request to Helix API, returning the decoded JSON body."""
        try:
            response = await self._http.get(
                f"{HELIX_BASE}/{path}",
                params=params,
                headers=self._app_headers(token),
            )
        except httpx.TimeoutException:
            logger.error(f"Helix GET /{path} timed out")
            raise UpstreamTimeout() from None
        except httpx.HTTPError as e:
            raise UpstreamError(f"Helix GET /{path} failed: {e}") from e

        if not response.is_success:
            raise UpstreamError(
                f"Request failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        try:
            return cast(dict[str, Any], response.json())
        except ValueError:
            raise UpstreamError("Invalid JSON response", status_code=response.status_code) from None

    # ------------------------------------------------------------------
    # App token
    # ------------------------------------------------------------------

    async def request_app_token(self) -> str:
        """Exchange the client id/secret for an app access token.

        Raises:
            ConfigMissing: client id or secret is not set
            AuthError: the grant was rejected, errored or timed out
        """
        if not self.is_configured:
            raise ConfigMissing("Twitch credentials not configured")

        try:
            response = await self._http.post(
                f"{OAUTH_BASE}/token",
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "grant_type": "client_credentials",
                },
            )
        except httpx.TimeoutException:
            logger.error("Timeout while requesting app token")
            raise AuthError("Request timeout") from None
        except httpx.HTTPError as e:
            raise AuthError(f"Twitch auth failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"Failed to get app token: {response.status_code}")
            raise AuthError(f"Twitch auth failed: {response.text}")

        try:
            access_token = response.json().get("access_token")
        except ValueError:
            raise AuthError("Twitch auth failed: invalid JSON response") from None
        if not access_token:
            raise AuthError("Twitch auth failed: no access_token in response")
        return cast(str, access_token)

    # ------------------------------------------------------------------
    # Channel data
    # ------------------------------------------------------------------

    async def get_follower_count(self, broadcaster_id: str, token: str) -> int:
        """Total number of followers of a broadcaster."""
        data = await self._helix_get(
            "channels/followers", {"broadcaster_id": broadcaster_id}, token=token
        )
        return int(data.get("total") or 0)

    async def get_streams(self, user_id: str, token: str) -> list[dict]:
        """Active streams of a user; empty when offline."""
        data = await self._helix_get("streams", {"user_id": user_id}, token=token)
        streams = data.get("data")
        if streams is None:
            return []
        if not isinstance(streams, list):
            raise UpstreamError("Malformed streams response")
        return cast(list[dict], streams)
