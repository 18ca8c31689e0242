"""YouTube Data API client (channel statistics only)."""

import logging

import httpx

from .errors import ConfigMissing, UpstreamError, UpstreamTimeout

logger = logging.getLogger(__name__)

YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"


class YouTubeAPIClient:
    """API-key authenticated client for the YouTube Data API v3."""

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = 10.0,
        http: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self._http = http or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        await self._http.aclose()

    async def get_subscriber_count(self, channel_id: str) -> int:
        """Read ``subscriberCount`` from the channel statistics resource."""
        if not self.api_key or not channel_id:
            raise ConfigMissing("YouTube credentials not configured")

        try:
            response = await self._http.get(
                f"{YOUTUBE_API_BASE}/channels",
                params={"part": "statistics", "id": channel_id, "key": self.api_key},
            )
        except httpx.TimeoutException:
            logger.error("YouTube channel statistics request timed out")
            raise UpstreamTimeout() from None
        except httpx.HTTPError as e:
            logger.error(f"YouTube request failed: {e}")
            raise UpstreamError(f"YouTube request failed: {e}") from e

        if not response.is_success:
            logger.error(f"Failed to fetch YouTube stats: {response.status_code}")
            raise UpstreamError(
                f"Request failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            items = response.json().get("items") or []
            if not items:
                raise UpstreamError(f"No YouTube channel found for id {channel_id}")
            return int(items[0]["statistics"]["subscriberCount"])
        except (ValueError, KeyError, TypeError) as e:
            raise UpstreamError(f"Malformed channel statistics response: {e}") from e
