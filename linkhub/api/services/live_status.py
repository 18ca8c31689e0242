"""Live-status service.

Answers "is the stream live right now" for the site's live indicator. The
answer is always a response the browser can render: upstream failures turn
into an offline reading instead of an error.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from linkhub.shared.errors import ConfigMissing, UpstreamError
from linkhub.shared.models import StreamInfo, isoformat_utc
from linkhub.shared.token_cache import TokenCache
from linkhub.shared.twitch_api import TwitchAPIClient

logger = logging.getLogger(__name__)

NO_CACHE = "no-cache"


@dataclass
class LiveStatusOutcome:
    """Payload plus the HTTP status and cache hint it should be served with."""

    is_live: bool
    status_code: int
    cache_control: str
    timestamp: str
    stream: StreamInfo | None = None
    error: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"isLive": self.is_live}
        if self.error is None:
            payload["streamData"] = (
                {
                    "title": self.stream.title,
                    "game": self.stream.game,
                    "viewers": self.stream.viewers,
                    "startedAt": self.stream.started_at,
                }
                if self.stream
                else None
            )
        else:
            payload["error"] = self.error
        payload["cached"] = False
        payload["timestamp"] = self.timestamp
        return payload


class LiveStatusService:
    """Resolves the broadcaster's live state through a cached app token."""

    def __init__(
        self,
        twitch_api: TwitchAPIClient,
        token_cache: TokenCache,
        user_id: str,
        *,
        cache_seconds: int = 60,
        clock: Callable[[], float] = time.time,
    ):
        self.twitch_api = twitch_api
        self.token_cache = token_cache
        self.user_id = user_id
        self.cache_seconds = cache_seconds
        self._clock = clock

    @property
    def is_configured(self) -> bool:
        return bool(self.user_id and self.twitch_api.is_configured)

    def _timestamp(self, now: float) -> str:
        return isoformat_utc(datetime.fromtimestamp(now, tz=UTC))

    async def check(self, now: float | None = None) -> LiveStatusOutcome:
        """Run one live-status lookup at time *now* (defaults to the clock)."""
        if now is None:
            now = self._clock()

        if not self.is_configured:
            return self._unconfigured(now)

        try:
            token = await self.token_cache.acquire(now)
            streams = await self.twitch_api.get_streams(self.user_id, token)
            stream = StreamInfo.from_helix(streams[0]) if streams else None
        except ConfigMissing:
            return self._unconfigured(now)
        except Exception as e:
            if isinstance(e, UpstreamError) and e.status_code == 401:
                logger.warning("Twitch rejected cached app token, evicting it")
                self.token_cache.invalidate()
            logger.error(f"Error checking Twitch live status: {e}")
            return LiveStatusOutcome(
                is_live=False,
                status_code=200,
                cache_control=NO_CACHE,
                timestamp=self._timestamp(now),
                error=str(e),
            )

        return LiveStatusOutcome(
            is_live=stream is not None,
            status_code=200,
            cache_control=f"public, max-age={self.cache_seconds}",
            timestamp=self._timestamp(now),
            stream=stream,
        )

    def _unconfigured(self, now: float) -> LiveStatusOutcome:
        return LiveStatusOutcome(
            is_live=False,
            status_code=503,
            cache_control=NO_CACHE,
            timestamp=self._timestamp(now),
            error="Twitch not configured",
        )
