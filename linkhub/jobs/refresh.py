"""Stats refresh job.

One run fetches every configured platform concurrently, then rewrites the
stats and media-kit artifacts. Results keep the fixed platform order no
matter which fetch finishes first. When nothing could be fetched the
artifacts are left as they are, so the site keeps its last-known stats.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from linkhub.shared.models import PlatformStat, StatsDocument, isoformat_utc
from linkhub.shared.twitch_api import TwitchAPIClient
from linkhub.shared.youtube_api import YouTubeAPIClient

from .config import RefreshSettings
from .platforms import FetchResult, PlatformFetcher, TwitchFetcher, YouTubeFetcher, collect_stats
from .store import read_json_object, write_json_atomic

logger = logging.getLogger(__name__)


@dataclass
class RefreshReport:
    """What one refresh run did."""

    results: list[FetchResult] = field(default_factory=list)
    platforms: list[PlatformStat] = field(default_factory=list)
    stats_written: bool = False
    media_kit_written: bool = False

    def summary(self) -> str:
        outcomes = ", ".join(f"{r.platform}={r.status.value}" for r in self.results)
        written = "stats updated" if self.stats_written else "kept existing data"
        return f"{outcomes or 'no platforms'} ({written})"


def build_media_kit(
    existing: dict[str, Any], platforms: Sequence[PlatformStat], now: datetime
) -> dict[str, Any]:
    """Return *existing* with only ``stats`` and ``lastUpdated`` replaced."""
    media_kit = dict(existing)
    media_kit["stats"] = [p.to_dict() for p in platforms]
    media_kit["lastUpdated"] = isoformat_utc(now)
    return media_kit


class StatsRefreshJob:
    """Fetch platform stats and persist them to the site's data files."""

    def __init__(
        self,
        fetchers: Sequence[PlatformFetcher],
        stats_path: Path,
        media_kit_path: Path,
    ):
        self.fetchers = list(fetchers)
        self.stats_path = stats_path
        self.media_kit_path = media_kit_path

    async def run_once(self, now: datetime | None = None) -> RefreshReport:
        """Run one refresh cycle.

        Per-platform failures are absorbed into the report. Errors reading
        or writing the artifacts propagate to the caller.
        """
        logger.info("Fetching social media stats...")

        # gather preserves input order, which is the fixed platform order
        results = list(await asyncio.gather(*(f.fetch() for f in self.fetchers)))
        report = RefreshReport(results=results, platforms=collect_stats(results))

        if not report.platforms:
            logger.warning("No stats fetched, keeping existing data")
            return report

        now = now or datetime.now(UTC)

        # Build both documents before touching either file
        stats_document = StatsDocument(platforms=report.platforms, last_updated=now).to_dict()
        media_kit = build_media_kit(
            read_json_object(self.media_kit_path), report.platforms, now
        )

        write_json_atomic(self.stats_path, stats_document)
        report.stats_written = True
        write_json_atomic(self.media_kit_path, media_kit)
        report.media_kit_written = True

        logger.info("Stats updated successfully!")
        return report


class RefreshRunner:
    """Owns the upstream clients for one run and closes them afterwards."""

    def __init__(
        self,
        settings: RefreshSettings,
        twitch_api: TwitchAPIClient | None = None,
        youtube_api: YouTubeAPIClient | None = None,
    ):
        self.settings = settings
        self.twitch_api = twitch_api or TwitchAPIClient(
            settings.twitch_client_id,
            settings.twitch_client_secret,
            timeout=settings.request_timeout,
        )
        self.youtube_api = youtube_api or YouTubeAPIClient(
            settings.youtube_api_key,
            timeout=settings.request_timeout,
        )

    def build_job(self) -> StatsRefreshJob:
        fetchers: list[PlatformFetcher] = [
            TwitchFetcher(self.twitch_api, self.settings.twitch_user_id),
            YouTubeFetcher(self.youtube_api, self.settings.youtube_channel_id),
        ]
        return StatsRefreshJob(
            fetchers,
            stats_path=self.settings.stats_path,
            media_kit_path=self.settings.media_kit_path,
        )

    async def run(self, now: datetime | None = None) -> RefreshReport:
        try:
            return await self.build_job().run_once(now)
        finally:
            await self.twitch_api.close()
            await self.youtube_api.close()
