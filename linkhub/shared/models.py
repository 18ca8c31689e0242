"""Data models for platform stats and the persisted site documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from .errors import UpstreamError


def isoformat_utc(moment: datetime) -> str:
    """Format as ISO-8601 UTC with millisecond precision, e.g. 2024-05-01T12:00:00.000Z"""
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class PlatformStat:
    """Follower count for one platform, optionally with live status."""

    platform: str
    followers: int
    is_live: bool | None = None

    def __post_init__(self) -> None:
        if self.followers < 0:
            raise ValueError(f"followers must be >= 0, got {self.followers}")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"platform": self.platform, "followers": self.followers}
        if self.is_live is not None:
            data["isLive"] = self.is_live
        return data


@dataclass
class StatsDocument:
    """Contents of the stats artifact."""

    platforms: list[PlatformStat] = field(default_factory=list)
    last_updated: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "platforms": [p.to_dict() for p in self.platforms],
            "lastUpdated": isoformat_utc(self.last_updated) if self.last_updated else None,
        }


@dataclass(frozen=True)
class AuthToken:
    """Bearer token with the time (epoch seconds) it stops being usable."""

    value: str
    expires_at: float


@dataclass(frozen=True)
class StreamInfo:
    """Metadata of the first active stream entry."""

    title: str
    game: str
    viewers: int
    started_at: str

    @classmethod
    def from_helix(cls, entry: Any) -> StreamInfo:
        """Build from a Helix streams entry; raise UpstreamError when it is malformed."""
        if not isinstance(entry, dict):
            raise UpstreamError("Malformed streams response")
        try:
            viewers = int(entry.get("viewer_count", 0))
        except (TypeError, ValueError):
            raise UpstreamError("Malformed streams response") from None
        return cls(
            title=entry.get("title") or "",
            game=entry.get("game_name") or "",
            viewers=viewers,
            started_at=entry.get("started_at") or "",
        )
