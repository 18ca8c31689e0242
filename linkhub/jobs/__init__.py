"""Periodic stats refresh job."""

from .config import RefreshSettings, get_refresh_settings
from .platforms import FetchResult, FetchStatus, PlatformFetcher, TwitchFetcher, YouTubeFetcher
from .refresh import RefreshReport, RefreshRunner, StatsRefreshJob

__all__ = [
    "FetchResult",
    "FetchStatus",
    "PlatformFetcher",
    "RefreshReport",
    "RefreshRunner",
    "RefreshSettings",
    "StatsRefreshJob",
    "TwitchFetcher",
    "YouTubeFetcher",
    "get_refresh_settings",
]
