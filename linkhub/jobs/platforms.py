"""Per-platform stat fetchers.

Each fetcher turns one upstream platform into a tagged ``FetchResult``. A
fetcher never raises: missing configuration becomes ``skipped`` and any
error becomes ``failed``, so one platform can not abort the others.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from linkhub.shared.errors import ConfigMissing
from linkhub.shared.models import PlatformStat
from linkhub.shared.twitch_api import TwitchAPIClient
from linkhub.shared.youtube_api import YouTubeAPIClient

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one platform fetch."""

    platform: str
    status: FetchStatus
    stat: PlatformStat | None = None
    reason: str | None = None

    @classmethod
    def ok(cls, stat: PlatformStat) -> FetchResult:
        return cls(platform=stat.platform, status=FetchStatus.OK, stat=stat)

    @classmethod
    def skipped(cls, platform: str, reason: str) -> FetchResult:
        return cls(platform=platform, status=FetchStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, platform: str, reason: str) -> FetchResult:
        return cls(platform=platform, status=FetchStatus.FAILED, reason=reason)


class PlatformFetcher(ABC):
    """Fetches the current PlatformStat for one platform."""

    name: str

    async def fetch(self) -> FetchResult:
        try:
            stat = await self.fetch_stat()
        except ConfigMissing as e:
            logger.info(f"{self.name}: {e}, skipping")
            return FetchResult.skipped(self.name, str(e))
        except Exception as e:
            logger.error(f"Error fetching {self.name} stats: {e}")
            return FetchResult.failed(self.name, str(e))
        return FetchResult.ok(stat)

    @abstractmethod
    async def fetch_stat(self) -> PlatformStat:
        """Fetch follower data; raise ConfigMissing when not configured."""


class TwitchFetcher(PlatformFetcher):
    """Twitch followers plus live status, one app token per run."""

    name = "Twitch"

    def __init__(self, twitch_api: TwitchAPIClient, user_id: str):
        self.twitch_api = twitch_api
        self.user_id = user_id

    async def fetch_stat(self) -> PlatformStat:
        if not self.twitch_api.is_configured:
            raise ConfigMissing("Twitch credentials not configured")
        if not self.user_id:
            raise ConfigMissing("Twitch user ID not configured")

        token = await self.twitch_api.request_app_token()
        followers = await self.twitch_api.get_follower_count(self.user_id, token)
        streams = await self.twitch_api.get_streams(self.user_id, token)
        is_live = len(streams) > 0

        logger.info(f"Twitch: {followers} followers, Live: {is_live}")
        return PlatformStat(platform=self.name, followers=followers, is_live=is_live)


class YouTubeFetcher(PlatformFetcher):
    """YouTube subscriber count; no live status."""

    name = "YouTube"

    def __init__(self, youtube_api: YouTubeAPIClient, channel_id: str):
        self.youtube_api = youtube_api
        self.channel_id = channel_id

    async def fetch_stat(self) -> PlatformStat:
        if not self.youtube_api.api_key or not self.channel_id:
            raise ConfigMissing("YouTube credentials not configured")

        subscribers = await self.youtube_api.get_subscriber_count(self.channel_id)
        logger.info(f"YouTube: {subscribers} subscribers")
        return PlatformStat(platform=self.name, followers=subscribers)


def collect_stats(results: Iterable[FetchResult]) -> list[PlatformStat]:
    """Keep successful stats in the order the results were given."""
    return [r.stat for r in results if r.status is FetchStatus.OK and r.stat is not None]
